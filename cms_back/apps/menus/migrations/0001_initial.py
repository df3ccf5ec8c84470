# Generated manually - initial menu schema

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("menu", models.CharField(db_index=True, default="main", max_length=50)),
                ("title", models.CharField(max_length=200)),
                ("slug", models.CharField(blank=True, max_length=200, null=True)),
                ("url", models.CharField(blank=True, max_length=500, null=True)),
                ("icon", models.CharField(blank=True, max_length=100, null=True)),
                ("order", models.PositiveIntegerField(default=0)),
                ("page_id", models.CharField(blank=True, max_length=100, null=True)),
                ("is_external", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("parent", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="children", to="menus.menuitem")),
            ],
            options={
                "db_table": "menu_item",
                "ordering": ["menu", "order", "created_at"],
            },
        ),
    ]
