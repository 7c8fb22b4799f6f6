"""이미지 스토리지 서비스 — S3 또는 로컬 파일 저장.

Image Storage Service — Mirrors product images to S3 or local disk.
AWS 키가 비어있으면 자동으로 로컬 모드로 전환됩니다.

Objects are stored as ``{folder}/{public_id}.{ext}``. The public id
(key without extension) is what callers use to delete an image, so it can
be recovered from a canonical URL with ``public_id_from_url``.
"""

import asyncio
import logging
import mimetypes
import shutil
import uuid
from pathlib import Path
from urllib.parse import urlparse

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

# 로컬 업로드 디렉토리 — .env의 LOCAL_UPLOADS_DIR 또는 server/uploads/
_SERVER_ROOT: Path = Path(__file__).resolve().parent.parent.parent
UPLOADS_DIR: Path = Path(settings.LOCAL_UPLOADS_DIR) if settings.LOCAL_UPLOADS_DIR else _SERVER_ROOT / "uploads"


class StorageService:
    """이미지 업로드/삭제 서비스 — S3 또는 로컬 모드 자동 선택."""

    def __init__(self, uploads_dir: Path | None = None) -> None:
        self._client = None
        self.uploads_dir: Path = uploads_dir or UPLOADS_DIR

    @property
    def is_local(self) -> bool:
        return not settings.AWS_ACCESS_KEY_ID or not settings.AWS_S3_BUCKET

    @property
    def client(self):
        if self.is_local:
            return None
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=settings.AWS_S3_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    @property
    def base_url(self) -> str:
        if self.is_local:
            return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/uploads/"
        return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_S3_REGION}.amazonaws.com/"

    def _generate_key(self, source: str, folder: str) -> str:
        name = Path(urlparse(source).path).name
        ext = name.rsplit(".", 1)[-1].lower() if "." in name else "bin"
        return f"{folder.strip('/')}/{uuid.uuid4().hex}.{ext}"

    def _extract_key(self, file_url: str) -> str | None:
        """이 저장소가 발급한 URL이면 storage key를 반환합니다."""
        if file_url.startswith(self.base_url):
            return file_url[len(self.base_url):]
        return None

    @staticmethod
    def public_id_from_url(file_url: str) -> str:
        """URL의 마지막 경로에서 확장자를 제거한 public id를 반환합니다.

        "https://host/sda-ecommerce/products/ab12.png?v=3" -> "ab12"
        """
        name = Path(urlparse(file_url).path).name
        return name.rsplit(".", 1)[0] if "." in name else name

    def save_temp(self, filename: str, data: bytes) -> str:
        """업로드 파일을 임시 폴더에 저장하고 로컬 경로를 반환합니다.

        Stage an incoming multipart upload on disk until it is handed to
        ``upload``.
        """
        key = self._generate_key(filename, "temp")
        path = self.uploads_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    async def _fetch(self, url: str) -> bytes:
        async with httpx.AsyncClient(follow_redirects=True) as http:
            response = await http.get(url)
            response.raise_for_status()
            return response.content

    async def upload(self, source: str, folder: str) -> str:
        """이미지를 저장소에 올리고 최종 file URL을 반환합니다.

        ``source`` may be a local file path (moved into the store), a URL
        already issued by this store (copied), or a remote http(s) URL
        (downloaded).
        """
        key = self._generate_key(source, folder)
        existing_key = self._extract_key(source)
        is_remote = urlparse(source).scheme in ("http", "https")

        if self.is_local:
            dst = self.uploads_dir / key
            dst.parent.mkdir(parents=True, exist_ok=True)
            if existing_key is not None:
                shutil.copyfile(self.uploads_dir / existing_key, dst)
            elif is_remote:
                dst.write_bytes(await self._fetch(source))
            else:
                shutil.move(source, str(dst))
        else:
            content_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
            if existing_key is not None:
                await asyncio.to_thread(
                    self.client.copy_object,
                    Bucket=settings.AWS_S3_BUCKET,
                    Key=key,
                    CopySource={"Bucket": settings.AWS_S3_BUCKET, "Key": existing_key},
                )
            elif is_remote:
                body = await self._fetch(source)
                await asyncio.to_thread(
                    self.client.put_object,
                    Bucket=settings.AWS_S3_BUCKET,
                    Key=key,
                    Body=body,
                    ContentType=content_type,
                )
            else:
                await asyncio.to_thread(
                    self.client.upload_file,
                    source,
                    settings.AWS_S3_BUCKET,
                    key,
                    ExtraArgs={"ContentType": content_type},
                )
                Path(source).unlink(missing_ok=True)

        file_url = f"{self.base_url}{key}"
        logger.info("Uploaded image %s -> %s", source, file_url)
        return file_url

    async def delete(self, public_id: str) -> None:
        """public id(``folder/name``, 확장자 제외)에 해당하는 이미지를 삭제합니다."""
        if self.is_local:
            for path in self.uploads_dir.glob(f"{public_id}.*"):
                path.unlink()
        else:
            listing = await asyncio.to_thread(
                self.client.list_objects_v2,
                Bucket=settings.AWS_S3_BUCKET,
                Prefix=f"{public_id}.",
            )
            for obj in listing.get("Contents", []):
                await asyncio.to_thread(
                    self.client.delete_object,
                    Bucket=settings.AWS_S3_BUCKET,
                    Key=obj["Key"],
                )
        logger.info("Deleted image %s", public_id)


storage_service: StorageService = StorageService()
