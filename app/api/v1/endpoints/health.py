from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health")
def health(request: Request):
    hub = request.app.state.notification_hub
    return {"status": "ok", "liveConnections": hub.connection_count()}
