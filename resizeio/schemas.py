import datetime
import enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator


class Action(str, enum.Enum):
    """
    FIT scales into a box, an absent side copies the given one
    RESIZE scales into a box, an absent side is unconstrained
    """

    FIT = "fit"
    RESIZE = "resize"


class BackendKind(str, enum.Enum):
    LOCAL = "local"
    S3 = "s3"
    OTHER = "other"


class Visibility(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"


###########################################################
# Transform Schemas
###########################################################


class TransformSpec(BaseModel):
    action: str = Action.FIT.value
    width: Optional[int] = None
    height: Optional[int] = None

    @field_validator("action", mode="before")
    @classmethod
    def _plain_action(cls, value):
        if isinstance(value, enum.Enum):
            return value.value
        return value

    @property
    def is_valid(self) -> bool:
        return (self.width or 0) > 0 or (self.height or 0) > 0


class GeneratedDerivative(BaseModel):
    path: str
    content_type: str


###########################################################
# Backend Schemas
###########################################################


class Metadata(BaseModel):
    """
    Result of a backend metadata lookup.  Absence is an ordinary value,
    check `found` instead of catching.
    """

    found: bool
    fields: Dict[str, Any] = {}


NOT_FOUND = Metadata(found=False)


def found(**fields: Any) -> Metadata:
    return Metadata(found=True, fields=fields)


class StorageNode(BaseModel):
    api_url: Optional[str] = None
    region_name: str = "us-east-1"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None


class UploadOptions(BaseModel):
    visibility: Visibility = Visibility.PUBLIC
    expires: datetime.datetime
    cache_control: str
    content_type: str
    content_disposition: str


def make_upload_options(
    basename: str,
    content_type: str,
    browser_cache: int,
    now: Optional[datetime.datetime] = None,
) -> UploadOptions:
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return UploadOptions(
        expires=now + datetime.timedelta(seconds=browser_cache),
        cache_control=f"public, max-age={browser_cache}",
        content_type=content_type,
        content_disposition=f'inline; filename="{basename}"',
    )


###########################################################
# Request Schemas
###########################################################


class RequestContext(BaseModel):
    secure: bool = False


class ServerInfo(BaseModel):
    public_address: str


class DerivativePath(BaseModel):
    path: str
