from .role import Role, ROLE_HIERARCHY, get_role_level, has_role
from .user import User

__all__ = ["Role", "ROLE_HIERARCHY", "get_role_level", "has_role", "User"]
