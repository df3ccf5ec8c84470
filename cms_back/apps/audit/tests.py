from django.test import RequestFactory, TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import User, Role
from .models import AuditLog
from .services import write_audit_log


class WriteAuditLogTest(TestCase):
    """감사 로그 기록 테스트"""

    def setUp(self):
        self.factory = RequestFactory()
        self.user = User.objects.create_user(login_id="admin1", password="testpass123", name="관리자", role=Role.ADMIN)

    def test_records_request_info(self):
        request = self.factory.post("/api/menus/", HTTP_USER_AGENT="pytest", HTTP_X_FORWARDED_FOR="10.0.0.1, 10.0.0.2")
        request.user = self.user

        log = write_audit_log(request, "MENU_ITEM_CREATE", "MenuItem", 12, metadata={"menu": "main"})

        self.assertEqual(log.user, self.user)
        self.assertEqual(log.entity_id, "12")
        self.assertEqual(log.ip_address, "10.0.0.1")
        self.assertEqual(log.user_agent, "pytest")
        self.assertEqual(log.metadata, {"menu": "main"})

    def test_masks_sensitive_metadata(self):
        log = write_audit_log(None, "LOGIN_SUCCESS", "User", self.user.id, metadata={
            "password": "secret",
            "email": "admin@example.com",
        })

        self.assertEqual(log.metadata["password"], "********")
        self.assertEqual(log.metadata["email"], "ad***@example.com")
        self.assertIsNone(log.user)


class AuditLogApiTest(APITestCase):
    """감사 로그 API 테스트"""

    def setUp(self):
        self.admin = User.objects.create_user(login_id="admin1", password="testpass123", name="관리자", role=Role.ADMIN)
        self.editor = User.objects.create_user(login_id="editor1", password="testpass123", name="편집자", role=Role.EDITOR)
        write_audit_log(None, "MENU_ITEM_CREATE", "MenuItem", 1, user=self.admin)
        write_audit_log(None, "MENU_ITEM_REORDER", "MenuItem", "main", user=self.admin)

    def test_admin_only(self):
        self.client.force_authenticate(self.editor)

        response = self.client.get("/api/audit/")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_filter_by_action(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get("/api/audit/", {"action": "MENU_ITEM_REORDER"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["entity_id"], "main")
        self.assertEqual(response.data["results"][0]["user_login_id"], "admin1")
