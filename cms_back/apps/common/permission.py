from rest_framework.permissions import BasePermission
from apps.accounts.models import Role, has_role

# API 권한 체크용 Permission 클래스
# 역할 단계(ROLE_HIERARCHY)가 요구 역할 이상이면 허용
class HasRole(BasePermission):
    required_roles = None
    message = "해당 작업을 수행할 권한이 없습니다."

    def has_permission(self, request, view):
        required = self.required_roles or getattr(view, "required_roles", None)
        if not required:
            return bool(request.user and request.user.is_authenticated)
        return has_role(request.user, required)


class IsAdmin(HasRole):
    """ADMIN 역할만 접근 가능"""
    required_roles = [Role.ADMIN]


class IsEditor(HasRole):
    """EDITOR 이상 (EDITOR, ADMIN) 접근 가능"""
    required_roles = [Role.EDITOR]

