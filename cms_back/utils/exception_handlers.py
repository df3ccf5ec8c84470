from rest_framework.views import exception_handler
from rest_framework.response import Response
from django.utils import timezone
from .exceptions import CMSException
import logging

logger = logging.getLogger(__name__)


def _first_error(errors):
    """ValidationError 의 (중첩된) 첫 번째 메시지 추출"""
    while isinstance(errors, (list, dict)) and errors:
        errors = errors[0] if isinstance(errors, list) else next(iter(errors.values()))
    return str(errors)


def custom_exception_handler(exc, context):
    """DRF 기본 핸들러 + CMS 커스텀 핸들러"""

    # CMS 커스텀 예외 처리
    if isinstance(exc, CMSException):
        logger.warning(f"CMS Exception: {exc.code} - {exc.message}", extra={
            'code': exc.code,
            'detail': exc.detail_info,
            'field': exc.field,
            'view': context.get('view'),
            'request': context.get('request')
        })
        return Response(exc.get_full_details(), status=exc.status_code)

    # DRF 기본 예외 처리 (ValidationError, NotFound 등)
    response = exception_handler(exc, context)

    if response is not None:
        # DRF 예외를 표준 형식으로 변환
        data = response.data
        message = data.get('detail', '요청 처리 중 오류가 발생했습니다.') if isinstance(data, dict) else _first_error(data)
        error_detail = {
            'error': {
                'code': 'ERR_500',
                'message': str(message),
                'timestamp': timezone.now().isoformat()
            }
        }
        if response.status_code == 401:
            error_detail['error']['code'] = 'ERR_001'
        elif response.status_code == 403:
            error_detail['error']['code'] = 'ERR_002'
        elif response.status_code == 404:
            error_detail['error']['code'] = 'ERR_201'

        # ValidationError의 경우 field 정보 포함
        if isinstance(data, dict):
            for field, errors in data.items():
                if field != 'detail':
                    error_detail['error']['field'] = field
                    error_detail['error']['detail'] = _first_error(errors)
                    error_detail['error']['message'] = _first_error(errors)
                    error_detail['error']['code'] = 'ERR_101'
                    break
        elif isinstance(data, list):
            error_detail['error']['code'] = 'ERR_101'

        response.data = error_detail
        logger.warning(f"DRF Exception: {error_detail['error']['code']} - {error_detail['error']['message']}")
        return response

    # 예상치 못한 예외 (500 에러)
    logger.error(f"Unexpected Exception: {str(exc)}", exc_info=True, extra={
        'view': context.get('view'),
        'request': context.get('request')
    })

    return Response({
        'error': {
            'code': 'ERR_500',
            'message': '서버 내부 오류가 발생했습니다. 관리자에게 문의해주세요.',
            'timestamp': timezone.now().isoformat()
        }
    }, status=500)
