"""
FastAPI router for the boxes bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends

from app.application.boxes.dtos import BoxResult, PingBoxesQuery, RegisterBoxCommand
from app.application.boxes.ping_boxes import PingBoxesUseCase
from app.application.boxes.register_box import RegisterBoxUseCase
from app.interfaces.boxes.dependencies import (
    enforce_register_rate_limit,
    get_client_ip,
    get_ping_boxes_use_case,
    get_register_box_use_case,
)
from app.interfaces.boxes.schemas import BoxItem, ErrorResponse, RegisterRequest

router = APIRouter(tags=["boxes"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _to_item(result: BoxResult) -> BoxItem:
    return BoxItem(
        public_ip=result.public_ip,
        message=result.message,
        tunnel_configured=result.tunnel_configured,
        timestamp=result.timestamp,
    )


@router.post(
    "/register",
    response_model=BoxItem,
    responses=ERROR_RESPONSES,
    summary="Register a box",
    description="Record or refresh the box announcing this tunnel message.",
    dependencies=[Depends(enforce_register_rate_limit)],
)
def register_box(
    body: RegisterRequest,
    public_ip: str = Depends(get_client_ip),
    use_case: RegisterBoxUseCase = Depends(get_register_box_use_case),
) -> BoxItem:
    """Register the calling box under its public IP."""
    command = RegisterBoxCommand(
        public_ip=public_ip,
        message=body.message,
        tunnel_configured=body.tunnel_configured,
    )
    return _to_item(use_case.execute(command))


@router.get(
    "/ping",
    response_model=list[BoxItem],
    responses=ERROR_RESPONSES,
    summary="List boxes behind this address",
    description="Evict stale registrations, then list the caller's boxes.",
)
def ping_boxes(
    public_ip: str = Depends(get_client_ip),
    use_case: PingBoxesUseCase = Depends(get_ping_boxes_use_case),
) -> list[BoxItem]:
    """List live registrations sharing the caller's public IP."""
    results = use_case.execute(PingBoxesQuery(public_ip=public_ip))
    return [_to_item(r) for r in results]
