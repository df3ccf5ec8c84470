from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import LoginView, MeView

# 인증 API 엔드포인트 정의
urlpatterns = [
    path("login/", LoginView.as_view(), name="login"), # 로그인 (JWT 발급)
    path("refresh/", TokenRefreshView.as_view(), name="token_refresh"), # Refresh 토큰 재발급
    path("me/", MeView.as_view(), name="me"), # 로그인 사용자 정보 조회
]
