from app.schemas.common import CamelModel


class DownloadLink(CamelModel):
    url: str
    method: str = "GET"
    bucket: str
    object_key: str
    expires_in: int
