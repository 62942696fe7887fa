import structlog

from designdesk.core.batch import BatchResult
from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.asset.models import Asset, UploadFile
from designdesk.core.modules.asset.utils import sanitize_filename, validate_upload
from designdesk.errors import UserError

logger = structlog.get_logger(__name__)


class AssetService(Service):
    """Uploads, captions and deletes design section assets."""

    async def upload_file(self, section_id: str, file: UploadFile, description: str | None = None) -> list[Asset]:
        """Validate and upload a single file to a design section.

        Raises:
            ValidationError: If the file is rejected before upload
            UserError: If the API rejects the upload
        """
        validate_upload(file, max_size=self.core.config.max_upload_size)

        fields = {"sectionId": section_id}
        if description:
            fields["description"] = description

        data = await self.client.upload(
            "/api/design/upload",
            [("files", sanitize_filename(file.filename), file.content, file.mime_type)],
            fields=fields,
        )
        assets = [Asset.model_validate(item) for item in unwrap(data, "assets") or []]
        logger.debug("file_uploaded", section_id=section_id, filename=file.filename, size=file.size)
        return assets

    async def upload_files(
        self, section_id: str, files: list[UploadFile], description: str | None = None
    ) -> BatchResult[Asset]:
        """Upload files one by one; a failing file does not stop the rest."""
        result: BatchResult[Asset] = BatchResult()
        for file in files:
            try:
                result.succeeded.extend(await self.upload_file(section_id, file, description))
            except UserError as e:
                logger.warning("upload_failed", section_id=section_id, filename=file.filename, error=str(e))
                result.add_failure(file.filename, e)

        logger.info("upload_batch_finished", section_id=section_id, succeeded=len(result.succeeded), failed=len(result.failed))
        return result

    async def update_caption(self, asset_id: str, caption: str) -> Asset:
        data = await self.client.patch(f"/api/design/assets/{asset_id}", json={"caption": caption.strip()})
        return Asset.model_validate(unwrap(data, "asset"))

    async def delete_assets(self, asset_ids: list[str]) -> BatchResult[str]:
        """Delete assets independently and report which ones failed."""
        result: BatchResult[str] = BatchResult()
        for asset_id in asset_ids:
            try:
                await self.client.delete(f"/api/design/assets/{asset_id}")
                result.succeeded.append(asset_id)
            except UserError as e:
                logger.warning("asset_delete_failed", asset_id=asset_id, error=str(e))
                result.add_failure(asset_id, e)

        logger.info("asset_delete_batch_finished", succeeded=len(result.succeeded), failed=len(result.failed))
        return result
