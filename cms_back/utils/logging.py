import re

SENSITIVE_KEYS = ('password', 'token', 'access', 'refresh', 'secret')


def mask_email(email):
    """이메일 마스킹"""
    if not email or '@' not in email:
        return email
    prefix, domain = email.split('@', 1)
    masked_prefix = prefix[:2] + '*' * (len(prefix) - 2)
    return f"{masked_prefix}@{domain}"

def mask_phone(phone):
    """전화번호 마스킹"""
    if not phone:
        return phone
    return re.sub(r'(\d{2,3})-(\d{3,4})-(\d{4})', r'\1-****-\3', phone)

def mask_sensitive_data(data):
    """딕셔너리 내 민감 정보 일괄 마스킹 (감사 로그 metadata 저장용)"""
    if not isinstance(data, dict):
        return data

    masked_data = data.copy()
    if 'email' in masked_data:
        masked_data['email'] = mask_email(masked_data['email'])
    if 'phone' in masked_data:
        masked_data['phone'] = mask_phone(masked_data['phone'])
    for key in masked_data:
        if key.lower() in SENSITIVE_KEYS:
            masked_data[key] = '********'

    return masked_data
