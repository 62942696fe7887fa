import structlog

from designdesk.core.batch import BatchResult
from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.asset.models import UploadFile
from designdesk.core.modules.asset.utils import sanitize_filename
from designdesk.core.modules.project_update.models import (
    BlobUploadTicket,
    ProjectUpdate,
    ProjectUpdateDraft,
    UpdatePhoto,
)
from designdesk.errors import UserError, ValidationError
from designdesk.utils import now

logger = structlog.get_logger(__name__)


class ProjectUpdateService(Service):
    """Project update feed with direct-to-blob photo uploads."""

    async def list_updates(self, project_id: str) -> list[ProjectUpdate]:
        data = await self.client.get(f"/api/projects/{project_id}/updates")
        return [ProjectUpdate.model_validate(item) for item in unwrap(data, "updates") or []]

    async def create_update(self, project_id: str, draft: ProjectUpdateDraft) -> ProjectUpdate:
        data = await self.client.post(f"/api/projects/{project_id}/updates", json=draft.to_api())
        update = ProjectUpdate.model_validate(unwrap(data, "update"))
        logger.info("project_update_created", project_id=project_id, update_id=update.id, type=update.type)
        return update

    async def edit_update(self, project_id: str, update_id: str, draft: ProjectUpdateDraft) -> ProjectUpdate:
        data = await self.client.put(f"/api/projects/{project_id}/updates/{update_id}", json=draft.to_api())
        return ProjectUpdate.model_validate(unwrap(data, "update"))

    async def delete_update(self, project_id: str, update_id: str) -> None:
        await self.client.delete(f"/api/projects/{project_id}/updates/{update_id}")
        logger.info("project_update_deleted", project_id=project_id, update_id=update_id)

    async def upload_photo(
        self,
        project_id: str,
        update_id: str,
        file: UploadFile,
        caption: str | None = None,
        notes: str | None = None,
        room_id: str | None = None,
    ) -> UpdatePhoto:
        """Upload one file straight to blob storage, then register it on the update.

        The API hands out an upload ticket for the blob path; the bytes never
        pass through the API itself.
        """
        if file.size > self.core.config.max_upload_size:
            raise ValidationError(f"{file.filename}: File too large")

        timestamp = int(now().timestamp() * 1000)
        safe_name = sanitize_filename(file.filename).replace(" ", "_")
        pathname = f"project-updates/{project_id}/{update_id}/{timestamp}-{safe_name}"

        ticket = BlobUploadTicket.model_validate(unwrap(await self.client.post("/api/blob-upload", json={"pathname": pathname})))
        await self.client.put_bytes(ticket.upload_url, file.content, file.mime_type, token=ticket.token)

        data = await self.client.post(
            f"/api/projects/{project_id}/updates/{update_id}/blob-photo",
            json={
                "blobUrl": ticket.url,
                "filename": file.filename,
                "size": file.size,
                "mimeType": file.mime_type,
                "caption": caption or "",
                "notes": notes or "",
                "tags": [],
                "roomId": room_id,
                "takenAt": now().isoformat(),
            },
        )
        return UpdatePhoto.model_validate(unwrap(data, "photo"))

    async def upload_photos(
        self,
        project_id: str,
        update_id: str,
        files: list[UploadFile],
        caption: str | None = None,
        notes: str | None = None,
        room_id: str | None = None,
    ) -> BatchResult[UpdatePhoto]:
        """Upload photos independently; one failure does not stop the others."""
        result: BatchResult[UpdatePhoto] = BatchResult()
        for index, file in enumerate(files, start=1):
            try:
                result.succeeded.append(await self.upload_photo(project_id, update_id, file, caption, notes, room_id))
            except UserError as e:
                logger.warning("update_photo_failed", update_id=update_id, filename=file.filename, error=str(e))
                result.add_failure(file.filename, e)
            logger.debug("update_photo_progress", update_id=update_id, done=index, total=len(files))

        logger.info(
            "update_photos_finished", update_id=update_id, succeeded=len(result.succeeded), failed=len(result.failed)
        )
        return result
