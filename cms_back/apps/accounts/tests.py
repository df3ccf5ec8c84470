from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework import status
from rest_framework.response import Response
from rest_framework.test import APIRequestFactory, APITestCase, force_authenticate
from rest_framework.views import APIView

from apps.common.permission import IsAdmin, IsEditor
from apps.audit.models import AuditLog
from .models import User, Role, get_role_level, has_role


class RoleHierarchyTest(TestCase):
    """역할 단계 테스트"""

    def setUp(self):
        self.admin = User.objects.create_user(login_id="admin1", password="testpass123", name="관리자", role=Role.ADMIN)
        self.editor = User.objects.create_user(login_id="editor1", password="testpass123", name="편집자", role=Role.EDITOR)
        self.author = User.objects.create_user(login_id="author1", password="testpass123", name="작성자", role=Role.AUTHOR)

    def test_role_levels(self):
        self.assertEqual(get_role_level(Role.ADMIN), 3)
        self.assertEqual(get_role_level("EDITOR"), 2)
        self.assertEqual(get_role_level("AUTHOR"), 1)
        self.assertEqual(get_role_level("UNKNOWN"), 0)
        self.assertEqual(get_role_level(None), 0)

    def test_greater_or_equal_level(self):
        """상위 역할은 하위 역할 권한을 포함"""
        self.assertTrue(has_role(self.admin, Role.EDITOR))
        self.assertTrue(has_role(self.editor, Role.EDITOR))
        self.assertFalse(has_role(self.author, Role.EDITOR))
        self.assertFalse(has_role(self.editor, Role.ADMIN))

    def test_any_of_required_roles(self):
        self.assertTrue(has_role(self.author, [Role.ADMIN, Role.AUTHOR]))
        self.assertFalse(has_role(self.author, [Role.ADMIN, Role.EDITOR]))

    def test_unknown_required_role_denied(self):
        self.assertFalse(has_role(self.admin, "SUPERUSER"))

    def test_anonymous_denied(self):
        self.assertFalse(has_role(AnonymousUser(), Role.AUTHOR))
        self.assertFalse(has_role(None, Role.AUTHOR))

    def test_superuser_defaults_to_admin(self):
        user = User.objects.create_superuser(login_id="root", password="testpass123", name="root")
        self.assertEqual(user.role, Role.ADMIN)


class EditorOnlyView(APIView):
    permission_classes = [IsEditor]

    def get(self, request):
        return Response({"ok": True})


class AdminOnlyView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response({"ok": True})


class RolePermissionTest(TestCase):
    """역할 Permission 클래스 테스트"""

    def setUp(self):
        self.factory = APIRequestFactory()
        self.users = {
            role: User.objects.create_user(login_id=role.lower(), password="testpass123", name=role, role=role)
            for role in (Role.ADMIN, Role.EDITOR, Role.AUTHOR)
        }

    def call(self, view, user=None):
        request = self.factory.get("/")
        if user is not None:
            force_authenticate(request, user=user)
        return view.as_view()(request)

    def test_editor_view_allows_editor_and_above(self):
        self.assertEqual(self.call(EditorOnlyView, self.users[Role.ADMIN]).status_code, 200)
        self.assertEqual(self.call(EditorOnlyView, self.users[Role.EDITOR]).status_code, 200)
        self.assertEqual(self.call(EditorOnlyView, self.users[Role.AUTHOR]).status_code, 403)

    def test_admin_view_allows_admin_only(self):
        self.assertEqual(self.call(AdminOnlyView, self.users[Role.ADMIN]).status_code, 200)
        self.assertEqual(self.call(AdminOnlyView, self.users[Role.EDITOR]).status_code, 403)

    def test_anonymous_rejected(self):
        self.assertEqual(self.call(EditorOnlyView).status_code, 401)


class AuthApiTest(APITestCase):
    """로그인 API 테스트"""

    def setUp(self):
        self.user = User.objects.create_user(login_id="editor1", password="testpass123", name="편집자", role=Role.EDITOR)

    def test_login_success(self):
        response = self.client.post("/api/auth/login/", {"login_id": "editor1", "password": "testpass123"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["role"], Role.EDITOR)
        self.assertEqual(response.data["user"]["role_level"], 2)
        self.assertTrue(AuditLog.objects.filter(action="LOGIN_SUCCESS", user=self.user).exists())

    def test_login_wrong_password(self):
        response = self.client.post("/api/auth/login/", {"login_id": "editor1", "password": "wrong"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("error", response.data)
        self.assertFalse(AuditLog.objects.exists())

    def test_inactive_user_cannot_login(self):
        self.user.is_active = False
        self.user.save()

        response = self.client.post("/api/auth/login/", {"login_id": "editor1", "password": "testpass123"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_with_token(self):
        login = self.client.post("/api/auth/login/", {"login_id": "editor1", "password": "testpass123"}, format="json")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["login_id"], "editor1")
