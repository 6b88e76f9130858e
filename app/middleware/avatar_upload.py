# app/middleware/avatar_upload.py
from typing import List

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from app.context import AppContext
from app.database.dependencies import get_context


async def avatar_upload(request: Request, ctx: AppContext = Depends(get_context)) -> List[str]:
    """
    First stage of the add-user chain. Stores every file attached to a
    multipart form, whatever its field name, and returns their paths
    (the first one is the avatar). Rejections raise UploadError before
    validation runs.
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        return []

    form = await request.form()
    uploads = [
        value for _, value in form.multi_items()
        if isinstance(value, UploadFile) and value.filename
    ]
    if not uploads:
        return []

    return await ctx.avatar_uploader.store(uploads)
