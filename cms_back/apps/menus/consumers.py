from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .services import get_menu_group_name


# 메뉴 변경 알림 Consumer
# ws/menus/<menu>/ 를 구독하면 해당 메뉴가 변경될 때 MENU_CHANGED 수신
class MenuConsumer(AsyncJsonWebsocketConsumer):
    async def connect(self):
        self.menu = self.scope["url_route"]["kwargs"]["menu"]
        self.group_name = get_menu_group_name(self.menu)

        await self.channel_layer.group_add(
            self.group_name,
            self.channel_name,
        )
        await self.accept()

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(
            self.group_name,
            self.channel_name,
        )

    async def menu_changed(self, event):
        await self.send_json({
            "type": "MENU_CHANGED",
            "menu": event["menu"],
        })
