from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.dependencies import get_current_user, get_db, get_storage
from voyagehub.exceptions import BadRequestError, NotFoundError
from voyagehub.logging_config import get_logger
from voyagehub.models.document import Document, DocumentType
from voyagehub.models.user import User
from voyagehub.schemas.base import MessageResponse
from voyagehub.schemas.document import DocumentResponse, DocumentUpdate
from voyagehub.services.document_storage import URL_PREFIX, DocumentStorage
from voyagehub.services.vacation_service import get_visible_vacation

logger = get_logger(__name__)
router = APIRouter(prefix="/documents", tags=["documents"])


async def _get_document_for_user(db: AsyncSession, document_id: str, user: User) -> Document:
    result = await db.execute(select(Document).where(Document.id == document_id))
    document = result.scalar_one_or_none()
    if document is None:
        raise NotFoundError("Document not found")
    try:
        await get_visible_vacation(db, document.vacation_id, user)
    except NotFoundError:
        raise NotFoundError("Document not found")
    return document


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    vacation_id: Optional[str] = Query(None, alias="vacationId"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not vacation_id:
        raise BadRequestError("vacationId is required")
    try:
        vacation = await get_visible_vacation(db, vacation_id, current_user)
        result = await db.execute(
            select(Document)
            .where(Document.vacation_id == vacation.id)
            .order_by(Document.created_at.desc())
        )
        return result.scalars().all()

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching documents for vacation {vacation_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch documents"
        )


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    vacation_id: str = Form(..., alias="vacationId"),
    title: Optional[str] = Form(None),
    type: DocumentType = Form(DocumentType.OTHER),
    expiration_date: Optional[date] = Form(None, alias="expirationDate"),
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_storage),
    db: AsyncSession = Depends(get_db),
):
    """
    Store an uploaded PDF or image and record it against a vacation.

    The vacation is checked before anything is written to disk; if the row
    cannot be saved the stored file is removed again.
    """
    vacation = await get_visible_vacation(db, vacation_id, current_user)
    stored = await storage.save(file)

    try:
        document = Document(
            vacation_id=vacation.id,
            title=(title or "").strip() or stored.original_name,
            type=type,
            file_name=stored.original_name,
            file_url=stored.file_url,
            file_size=stored.size,
            mime_type=stored.mime_type,
            expiration_date=expiration_date,
            shared_with=[],
            uploaded_by=current_user.id,
        )
        db.add(document)
        await db.commit()
        await db.refresh(document)

        logger.info(f"Uploaded document {document.id} to vacation {vacation.id}")
        return document

    except Exception as e:
        logger.error(f"Error saving document for vacation {vacation_id}: {e}")
        await db.rollback()
        storage.remove(stored.stored_name)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload document"
        )


@router.get("/file/{filename}")
async def get_document_file(
    filename: str,
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_storage),
    db: AsyncSession = Depends(get_db),
):
    """Serve a stored file to users who can see its vacation"""
    path = storage.resolve(filename)
    if path is None:
        raise NotFoundError("File not found")

    result = await db.execute(select(Document).where(Document.file_url == f"{URL_PREFIX}/{filename}"))
    document = result.scalar_one_or_none()
    if document is None:
        raise NotFoundError("File not found")
    try:
        await get_visible_vacation(db, document.vacation_id, current_user)
    except NotFoundError:
        raise NotFoundError("File not found")

    return FileResponse(path, media_type=document.mime_type, filename=document.file_name)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    payload: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        document = await _get_document_for_user(db, document_id, current_user)

        changes = payload.changes()
        if "shared_with" in changes:
            changes["shared_with"] = sorted({str(email).lower() for email in changes["shared_with"]})
        for field, value in changes.items():
            setattr(document, field, value)

        await db.commit()
        await db.refresh(document)
        return document

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating document {document_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update document"
        )


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    storage: DocumentStorage = Depends(get_storage),
    db: AsyncSession = Depends(get_db),
):
    try:
        document = await _get_document_for_user(db, document_id, current_user)
        stored_name = document.stored_name
        await db.delete(document)
        await db.commit()

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting document {document_id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete document"
        )

    storage.remove(stored_name)
    logger.info(f"Deleted document {document_id}")
    return MessageResponse(message="Document deleted successfully")
