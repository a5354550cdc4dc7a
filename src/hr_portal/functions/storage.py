from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from typing import Callable

from itsdangerous import BadSignature, URLSafeTimedSerializer
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from werkzeug.utils import secure_filename

from ..common.datetime_utils import utc_now
from ..core.exceptions import AuthorizationError, NotFoundError

_SIGN_SALT = "storage-signed-url"


def placeholder_invoice_pdf(enrollment_id: str) -> bytes:
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    _, height = A4
    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawString(72, height - 72, f"Invoice for Enrollment ID: {enrollment_id}")
    pdf.showPage()
    pdf.save()
    return buf.getvalue()


class ObjectStorage:
    """Bucketed files under ``root`` handed out through expiring signed URLs."""

    def __init__(self, root: str | Path, *, secret_key: str, clock: Callable[[], datetime] = utc_now):
        self._root = Path(root)
        self._serializer = URLSafeTimedSerializer(secret_key, salt=_SIGN_SALT)
        self._clock = clock

    def _path(self, bucket: str, name: str) -> Path:
        return self._root / secure_filename(bucket) / secure_filename(name)

    def upload(self, bucket: str, name: str, content: bytes, *, upsert: bool = False) -> Path:
        path = self._path(bucket, name)
        if path.exists() and not upsert:
            raise FileExistsError(f"{bucket}/{name} already exists")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    def create_signed_url(self, bucket: str, name: str, expires_in: int) -> str:
        token = self._serializer.dumps({"bucket": bucket, "name": name, "expires_in": int(expires_in)})
        return f"/storage/v1/object/sign/{bucket}/{name}?token={token}"

    def resolve_signed(self, bucket: str, name: str, token: str) -> Path:
        try:
            payload, signed_at = self._serializer.loads(token or "", return_timestamp=True)
        except BadSignature:
            raise AuthorizationError("Invalid signature")
        if payload.get("bucket") != bucket or payload.get("name") != name:
            raise AuthorizationError("Invalid signature")
        if (self._clock() - signed_at).total_seconds() > payload.get("expires_in", 0):
            raise AuthorizationError("Signed URL has expired")

        path = self._path(bucket, name)
        if not path.is_file():
            raise NotFoundError("Object not found")
        return path
