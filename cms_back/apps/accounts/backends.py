from django.contrib.auth.backends import ModelBackend
from apps.accounts.models import User

# login_id 기반 로그인 백엔드
class LoginBackend(ModelBackend):
    def authenticate(self, request, login_id=None, password=None, **kwargs):
        if login_id is None:
            login_id = kwargs.get(User.USERNAME_FIELD)
        try:
            user = User.objects.get(login_id=login_id)
        except User.DoesNotExist:
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
