from django.db import models
from django.contrib.auth.models import(
    BaseUserManager,
    AbstractBaseUser,
    PermissionsMixin,
)
from .role import Role

# 사용자 매니저
class UserManager(BaseUserManager):
    def create_user(self, login_id, password=None, role=Role.AUTHOR, **extra_fields):
        if not login_id:
            raise ValueError("ID는 필수 항목")

        user = self.model(login_id=login_id, role=role, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, login_id, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", Role.ADMIN)

        return self.create_user(login_id, password, **extra_fields)


# User 모델
class User(AbstractBaseUser, PermissionsMixin):
    login_id = models.CharField(max_length=50, unique=True)

    name = models.CharField(max_length=50)
    email = models.EmailField(blank=True, null=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.AUTHOR)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # 충돌 방지 : related_name 지정
    groups = models.ManyToManyField(
        "auth.Group",
        related_name="custom_user_groups",
        blank=True
    )
    user_permissions = models.ManyToManyField(
        "auth.Permission",
        related_name="custom_user_permissions",
        blank=True,
    )

    objects = UserManager()

    USERNAME_FIELD = "login_id"
    REQUIRED_FIELDS = ["name"]

    def __str__(self):
        return self.login_id
