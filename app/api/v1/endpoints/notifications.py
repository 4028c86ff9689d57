"""
WebSocket endpoint for real-time swap notifications.

A client connects with its user id (X-User-ID header or `user_id` query
parameter) and joins the `user-{id}` room; it then receives
`{"event": "notification", "message", "data", "timestamp"}` frames.
"""

from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

router = APIRouter()


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket, user_id: Optional[str] = None):
    if not user_id:
        header = websocket.headers.get("x-user-id")
        user_id = header.split(",")[0].strip() if header else None
    if not user_id:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    hub = websocket.app.state.notification_hub
    connection_id = await hub.connect(websocket, user_id)
    try:
        while True:
            # Clients only listen; anything they send is treated as a keepalive
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(connection_id)
