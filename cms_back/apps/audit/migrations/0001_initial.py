# Generated manually - initial audit schema

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(choices=[("LOGIN_SUCCESS", "Login Success"), ("MENU_ITEM_CREATE", "Menu Item Create"), ("MENU_ITEM_UPDATE", "Menu Item Update"), ("MENU_ITEM_DELETE", "Menu Item Delete"), ("MENU_ITEM_REORDER", "Menu Item Reorder")], max_length=30)),
                ("entity", models.CharField(max_length=50)),
                ("entity_id", models.CharField(max_length=100)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="audit_logs", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "audit_log",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="audit_log_created_idx"),
                    models.Index(fields=["entity", "entity_id"], name="audit_log_entity_idx"),
                    models.Index(fields=["action"], name="audit_log_action_idx"),
                ],
            },
        ),
    ]
