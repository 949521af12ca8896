from supabase import Client
from app.config import settings
from app.modules.storage.s3_storage import S3Storage
from typing import List, Optional
from fastapi import HTTPException
import os
import secrets
import time
import logging

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "heic", "gif"}


def resolve_image_url(supabase: Client, image_path: Optional[str], bucket: Optional[str] = None) -> str:
    """Turn a storage path into a public URL; full http(s) URLs are returned unchanged"""
    if not image_path or not image_path.strip():
        return ""
    if image_path.startswith("http://") or image_path.startswith("https://"):
        return image_path
    bucket = bucket or settings.property_images_bucket
    try:
        public_url = supabase.storage.from_(bucket).get_public_url(image_path)
        if public_url:
            return public_url
    except Exception as e:
        logger.warning(f"Could not resolve public URL for {image_path} in {bucket}: {e}")
    return image_path


def _extension(filename: Optional[str]) -> str:
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    return ext if ext in IMAGE_EXTENSIONS else "jpg"


class StorageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

        # Initialize S3 storage if credentials are available
        self.s3_storage = None
        if settings.s3_configured:
            try:
                self.s3_storage = S3Storage()
            except Exception as e:
                logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
                self.s3_storage = None

    def _upload(self, bucket: str, key: str, content: bytes, ext: str, upsert: bool) -> str:
        content_type = f"image/{'jpeg' if ext == 'jpg' else ext}"
        if self.s3_storage:
            logger.info(f"Uploading to S3: {key}")
            try:
                return self.s3_storage.upload_file(content, key, content_type=content_type)
            except Exception as e:
                logger.error(f"S3 upload failed: {str(e)}")
                raise HTTPException(status_code=500, detail=f"Failed to upload to S3: {str(e)}")

        try:
            self.supabase.storage.from_(bucket).upload(
                key,
                content,
                file_options={"content-type": content_type, "upsert": "true" if upsert else "false"}
            )
            public_url = self.supabase.storage.from_(bucket).get_public_url(key)
            logger.info(f"Uploaded to Supabase Storage: {public_url}")
            return public_url
        except Exception as e:
            logger.error(f"Supabase Storage upload failed: {str(e)}")
            raise HTTPException(status_code=500, detail=f"Failed to upload to storage: {str(e)}")

    def upload_property_image(self, content: bytes, filename: Optional[str]) -> str:
        """Upload a listing photo as properties/<ms>-<random>.<ext> and return its public URL"""
        if not content:
            raise HTTPException(status_code=400, detail="Empty image file")
        ext = _extension(filename)
        key = f"properties/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"
        return self._upload(settings.property_images_bucket, key, content, ext, upsert=False)

    def upload_user_avatar(self, content: bytes, filename: Optional[str], user_id: str) -> str:
        """Upload an avatar as avatars/<user>-<ms>.<ext>, overwriting if it exists"""
        if not content:
            raise HTTPException(status_code=400, detail="Empty image file")
        ext = _extension(filename)
        key = f"avatars/{user_id}-{int(time.time() * 1000)}.{ext}"
        return self._upload(settings.avatars_bucket, key, content, ext, upsert=True)

    def upload_property_images(self, files: List[tuple]) -> List[str]:
        """Upload (filename, content) pairs; failed images are skipped"""
        urls = []
        for filename, content in files:
            try:
                urls.append(self.upload_property_image(content, filename))
            except Exception as e:
                logger.error(f"Error uploading image {filename}: {e}")
        return urls
