import logging

from apps.common.utils import get_client_ip
from utils.logging import mask_sensitive_data
from .models import AuditLog

logger = logging.getLogger(__name__)


# Audit Log 기록 유틸
def write_audit_log(request, action, entity, entity_id, metadata=None, user=None):
    """
    감사 로그 1건 기록

    Args:
        request: DRF/Django request (None 허용 - 관리 명령 등)
        action: AuditLog.ACTION_CHOICES 중 하나
        entity: 대상 종류 (MenuItem, Menu, User)
        entity_id: 대상 식별자
        metadata: 부가 정보 (민감 정보는 마스킹 후 저장)
        user: 수행 사용자 (없으면 request.user)
    """
    if user is None and request is not None:
        request_user = getattr(request, "user", None)
        if request_user is not None and request_user.is_authenticated:
            user = request_user

    ip_address = None
    user_agent = ""
    if request is not None:
        ip_address = get_client_ip(request)
        user_agent = request.META.get("HTTP_USER_AGENT", "")

    log = AuditLog.objects.create(
        user=user,
        action=action,
        entity=entity,
        entity_id=str(entity_id),
        metadata=mask_sensitive_data(metadata) if metadata is not None else None,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    logger.info(f"Audit: {action} {entity}:{entity_id} by {user or 'system'}")
    return log
