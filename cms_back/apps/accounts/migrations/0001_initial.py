# Generated manually - initial accounts schema

from django.db import migrations, models
import apps.accounts.models.user


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("login_id", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=50)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("role", models.CharField(choices=[("ADMIN", "관리자"), ("EDITOR", "편집자"), ("AUTHOR", "작성자")], default="AUTHOR", max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("is_staff", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("groups", models.ManyToManyField(blank=True, related_name="custom_user_groups", to="auth.group")),
                ("user_permissions", models.ManyToManyField(blank=True, related_name="custom_user_permissions", to="auth.permission")),
            ],
            options={
                "abstract": False,
            },
            managers=[
                ("objects", apps.accounts.models.user.UserManager()),
            ],
        ),
    ]
