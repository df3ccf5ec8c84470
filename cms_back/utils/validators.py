"""
공통 검증 유틸리티

목적: 메뉴 항목 입력값(slug, url, 메뉴 이름) 검증
"""
import re
from urllib.parse import urlsplit

import httpx
from rest_framework import serializers


class ValidationPatterns:
    """검증 정규표현식 패턴"""

    # 내부 경로 slug (영문, 숫자, 하이픈, 슬래시)
    MENU_SLUG = r'^/*[A-Za-z0-9\-/]+\Z'

    # 메뉴 이름 (main, footer, sidebar-left 등)
    MENU_NAME = r'^[A-Za-z0-9_\-]+\Z'

    # URL 에 허용하지 않는 문자 (제어 문자, 공백)
    URL_UNSAFE_CHARS = r'[\x00-\x20\x7f]'


# 메뉴 URL 에 허용되는 스킴
ALLOWED_URL_SCHEMES = frozenset({"http", "https", "mailto", "tel", "sms"})


def validate_menu_url(value):
    """
    메뉴 URL 검증

    Args:
        value: 상대 경로("/" 로 시작) 또는 http/https/mailto/tel/sms 절대 URL

    Returns:
        앞뒤 공백을 제거한 URL

    Raises:
        serializers.ValidationError: 형식이 올바르지 않은 경우
    """
    value = (value or "").strip()
    if not value:
        raise serializers.ValidationError('URL을 입력해주세요.')

    if re.search(ValidationPatterns.URL_UNSAFE_CHARS, value):
        raise serializers.ValidationError('URL에 공백이나 제어 문자를 사용할 수 없습니다.')

    if value.startswith("/") and not value.startswith(("//", "/\\")):
        return value

    try:
        parsed = urlsplit(value)
    except ValueError:
        parsed = None

    if parsed is None or parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise serializers.ValidationError(
            'URL이 올바르지 않습니다. 상대 경로 또는 http/https/mailto/tel/sms 스킴을 사용하세요.'
        )

    if parsed.scheme.lower() in ("http", "https"):
        try:
            url = httpx.URL(value)
            valid_host = bool(url.raw_host) and bool(url.host)
        except (httpx.InvalidURL, UnicodeError):
            valid_host = False
        if not valid_host:
            raise serializers.ValidationError('URL의 호스트가 올바르지 않습니다.')

    return value


def validate_menu_slug(value):
    """
    메뉴 slug 검증 (경로 탐색, 인코딩 우회 차단)

    Args:
        value: slug 문자열

    Returns:
        앞뒤 공백을 제거한 slug

    Raises:
        serializers.ValidationError: 허용되지 않은 문자가 포함된 경우
    """
    value = (value or "").strip()
    if not value:
        return value

    if not re.match(ValidationPatterns.MENU_SLUG, value):
        raise serializers.ValidationError(
            'slug에는 영문, 숫자, 하이픈(-), 슬래시(/)만 사용할 수 있습니다.'
        )
    return value


def validate_menu_name(value):
    """
    메뉴 이름 검증

    Raises:
        serializers.ValidationError: 형식이 올바르지 않은 경우
    """
    if not value or len(value) < 2:
        raise serializers.ValidationError('메뉴 이름은 2자 이상이어야 합니다.')

    if not re.match(ValidationPatterns.MENU_NAME, value):
        raise serializers.ValidationError(
            '메뉴 이름에는 영문, 숫자, 하이픈(-), 밑줄(_)만 사용할 수 있습니다.'
        )
    return value
