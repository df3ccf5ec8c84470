import time
import logging
import re
from django.utils.deprecation import MiddlewareMixin

from apps.common.utils import get_client_ip

logger = logging.getLogger('access')


# 로그에서 제외할 경로 (정적 파일, 헬스 체크)
ACCESS_LOG_EXCLUDE_PATTERNS = [
    r'^/static',
    r'^/media',
    r'^/health',
]

# HTTP 메서드 → action 매핑
METHOD_ACTION_MAP = {
    'GET': 'VIEW',
    'POST': 'CREATE',
    'PUT': 'UPDATE',
    'PATCH': 'UPDATE',
    'DELETE': 'DELETE',
}


def should_log_access(path):
    """접근 로그에 기록할 경로인지 확인"""
    for pattern in ACCESS_LOG_EXCLUDE_PATTERNS:
        if re.match(pattern, path):
            return False
    return True


class AccessLogMiddleware(MiddlewareMixin):
    """모든 요청과 응답을 로깅하는 미들웨어"""

    def process_request(self, request):
        request.start_time = time.time()

    def process_response(self, request, response):
        path = request.get_full_path()
        if not should_log_access(path.split('?')[0]):
            return response

        # 실행 시간 계산
        duration = time.time() - getattr(request, 'start_time', time.time())

        user = getattr(request, 'user', None)
        log_data = {
            'ip': get_client_ip(request),
            'method': request.method,
            'action': METHOD_ACTION_MAP.get(request.method, 'VIEW'),
            'path': path,
            'status': response.status_code,
            'duration': f"{duration:.3f}s",
            'user': str(user) if user is not None and user.is_authenticated else 'Anonymous',
        }

        message = f"{log_data['ip']} {log_data['user']} {log_data['method']} {log_data['path']} {log_data['status']} ({log_data['duration']})"

        if response.status_code >= 400:
            logger.warning(message, extra={'action': log_data['action']})
        else:
            logger.info(message, extra={'action': log_data['action']})

        return response
