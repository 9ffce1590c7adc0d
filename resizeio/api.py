from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from fastapi.routing import APIRouter

from resizeio import schemas
from resizeio.depends import get_request_context, get_resizer
from resizeio.resizer import Resizer

router = APIRouter()


@router.get("/info", response_model=schemas.ServerInfo, tags=["info"])
def get_info(resizer: Resizer = Depends(get_resizer)):
    return schemas.ServerInfo(public_address=resizer.settings.public_name)


@router.get(
    "/derivative",
    response_model=schemas.DerivativePath,
    tags=["derivative"],
    responses={307: {"description": "Redirect to the derivative"}},
)
def get_derivative(
    path: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    action: schemas.Action = schemas.Action.FIT,
    mode: str = "url",
    resizer: Resizer = Depends(get_resizer),
    context: schemas.RequestContext = Depends(get_request_context),
):
    if mode not in ("url", "path"):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "mode must be url or path")
    result = resizer.resolve(
        path,
        width,
        height,
        action.value,
        as_url=(mode == "url"),
        context=context,
    )
    if not result:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "No derivative available")
    if mode == "path":
        return schemas.DerivativePath(path=result)
    return RedirectResponse(url=result)
