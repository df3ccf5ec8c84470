from django.db import models

# 역할 (닫힌 열거형) : 권한 단계는 ROLE_HIERARCHY 로 관리
class Role(models.TextChoices):
    ADMIN = "ADMIN", "관리자"
    EDITOR = "EDITOR", "편집자"
    AUTHOR = "AUTHOR", "작성자"


# 역할별 권한 단계 (숫자가 클수록 상위 역할)
ROLE_HIERARCHY = {
    Role.ADMIN: 3,
    Role.EDITOR: 2,
    Role.AUTHOR: 1,
}


def get_role_level(role):
    """역할 코드 -> 권한 단계 (알 수 없는 역할은 0)"""
    if not role:
        return 0
    try:
        return ROLE_HIERARCHY[Role(role)]
    except ValueError:
        return 0


def has_role(user, required):
    """
    사용자 역할이 요구 역할 중 하나 이상의 단계와 같거나 높은지 확인

    Args:
        user: User 인스턴스 (익명 사용자 허용)
        required: 역할 코드 또는 역할 코드 목록
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return False

    roles = required if isinstance(required, (list, tuple, set)) else [required]
    user_level = get_role_level(getattr(user, "role", None))
    if user_level == 0:
        return False
    return any(
        get_role_level(role) and user_level >= get_role_level(role)
        for role in roles
    )
