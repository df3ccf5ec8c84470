import logging

from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from apps.audit.services import write_audit_log
from .models import User, get_role_level

logger = logging.getLogger(__name__)


# 사용자 모델을 JSON 타입의 데이터로 변환
class UserSerializer(serializers.ModelSerializer):
    role_display = serializers.CharField(source="get_role_display", read_only=True)
    role_level = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id"
            , "login_id"
            , "name"
            , "email"
            , "role"
            , "role_display"
            , "role_level"
            , "is_active"
            , "last_login"
            , "created_at"
            , "updated_at"
        ]
        read_only_fields = fields

    def get_role_level(self, obj):
        return get_role_level(obj.role)


# 로그인 : JWT 발급 + 사용자 정보 응답
class LoginSerializer(TokenObtainPairSerializer):

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        token["name"] = user.name
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        write_audit_log(
            self.context.get("request"),
            action="LOGIN_SUCCESS",
            entity="User",
            entity_id=str(self.user.pk),
            user=self.user,
        )
        logger.info(f"로그인 성공: {self.user.login_id}")
        return data
