from django.urls import path

from apps.menus.consumers import MenuConsumer

websocket_urlpatterns = [
    path("ws/menus/<str:menu>/", MenuConsumer.as_asgi()),
]
