"""Shared pytest fixtures."""

import json
import re
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from designdesk.app import App
from designdesk.config import Config
from designdesk.core.modules.comment.models import Comment, CommentAuthor
from designdesk.core.modules.user.models import TeamMember

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def iso(minutes: int) -> str:
    return (BASE_TIME + timedelta(minutes=minutes)).isoformat()


@pytest.fixture
def roster():
    """Team roster from the mention examples."""
    return [
        TeamMember(id="u1", name="John Smith", email="john@studio.test", role="DESIGNER"),
        TeamMember(id="u2", name="Jane Doe", email="jane@studio.test", role="RENDERER"),
    ]


@pytest.fixture
def make_comment():
    """Factory for comments created `minute` minutes after a fixed base time."""

    def _make(
        comment_id: str,
        minute: int = 0,
        parent_id: str | None = None,
        pinned: bool = False,
        content: str | None = None,
        author_name: str = "Alex Reed",
        section_type: str | None = None,
    ) -> Comment:
        return Comment(
            id=comment_id,
            content=content or f"comment {comment_id}",
            author=CommentAuthor(id="u9", name=author_name),
            created_at=BASE_TIME + timedelta(minutes=minute),
            parent_id=parent_id,
            is_pinned=pinned,
            section_type=section_type,
        )

    return _make


class FakeDesignApi:
    """In-process stand-in for the design REST API.

    Every handled request is appended to ``calls`` as (method, path, payload).
    Adding (method, path) to ``failures`` makes that route answer 500, adding
    it to ``missing`` makes it answer 404.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.failures: dict[tuple[str, str], str] = {}
        self.missing: set[tuple[str, str]] = set()
        self.roster = [
            {"id": "u1", "name": "John Smith", "email": "john@studio.test", "role": "DESIGNER"},
            {"id": "u2", "name": "Jane Doe", "email": "jane@studio.test", "role": "RENDERER"},
        ]
        self.workspace: dict[str, Any] = {
            "stage": {"id": "stage-1", "type": "DESIGN_CONCEPT", "status": "IN_PROGRESS", "roomId": "room-1"},
            "completionStatus": {"completed": 0, "total": 2, "percentage": 0},
            "sections": [
                {
                    "id": "sec-general",
                    "type": "GENERAL",
                    "content": "Warm palette",
                    "assets": [],
                    "comments": [
                        {"id": "c1", "content": "First idea", "createdAt": iso(1), "author": {"id": "u1", "name": "John Smith"}},
                        {
                            "id": "c2",
                            "content": "Agree with @Jane Doe",
                            "createdAt": iso(2),
                            "parentId": "c1",
                            "author": {"id": "u2", "name": "Jane Doe"},
                            "mentions": '["u2"]',
                        },
                        {
                            "id": "c3",
                            "content": "Client prefers oak",
                            "createdAt": iso(0),
                            "commentPin": {"id": "pin-1"},
                            "author": {"id": "u2", "name": "Jane Doe"},
                        },
                        {"id": "c4", "content": "Orphan", "createdAt": iso(5), "parentId": "gone"},
                    ],
                    "checklistItems": [
                        {"id": "i1", "text": "Pick tiles", "completed": False, "order": 0},
                        {"id": "i2", "text": "Order samples", "completed": True, "order": 1},
                        {"id": "i3", "text": "Confirm budget", "completed": False, "order": 2},
                    ],
                },
                {
                    "id": "sec-floor",
                    "type": "FLOOR",
                    "comments": [
                        {"id": "c5", "content": "Herringbone?", "createdAt": iso(3), "author": {"id": "u1", "name": "John Smith"}},
                    ],
                },
            ],
        }
        self.notifications = [
            {"id": "n1", "type": "MENTION", "title": "Jane mentioned you", "read": False, "createdAt": iso(1)},
            {"id": "n2", "type": "COMMENT", "title": "New comment", "read": False, "createdAt": iso(2)},
            {"id": "n3", "type": "UPLOAD", "title": "New photo", "read": True, "createdAt": iso(3)},
        ]
        self.deliveries = [
            {
                "id": "d1",
                "status": "SCHEDULED",
                "carrier": "UPS",
                "trackingNumber": "1Z999",
                "createdAt": iso(0),
                "order": {"id": "o1", "orderNumber": "PO-1001", "supplier": {"id": "s1", "name": "Tile House"}},
            }
        ]
        self.quote_preview = {
            "supplierGroups": [
                {
                    "key": "s1",
                    "supplier": {"id": "s1", "name": "Tile House", "email": "sales@tile.test"},
                    "items": [
                        {"item": {"id": "it1", "name": "Floor tile"}, "alreadySent": False},
                        {"item": {"id": "it2", "name": "Wall tile"}, "alreadySent": True},
                    ],
                },
                {
                    "key": "unassigned",
                    "supplier": None,
                    "items": [{"item": {"id": "it3", "name": "Pendant", "supplierName": "Lumen"}, "alreadySent": False}],
                },
            ]
        }
        self.app = self._build()

    def calls_to(self, method: str, path: str) -> list[Any]:
        return [payload for call_method, call_path, payload in self.calls if (call_method, call_path) == (method, path)]

    def _section(self, section_id: str) -> dict[str, Any] | None:
        return next((s for s in self.workspace["sections"] if s["id"] == section_id), None)

    def _build(self) -> FastAPI:  # noqa: C901, PLR0915
        api = FastAPI()

        @api.middleware("http")
        async def inject_errors(request: Request, call_next: Any) -> Any:
            key = (request.method, request.url.path)
            if key in self.missing:
                self.calls.append((request.method, request.url.path, None))
                return JSONResponse({"error": "Not found"}, status_code=404)
            message = self.failures.get(key)
            if message is not None:
                self.calls.append((request.method, request.url.path, None))
                return JSONResponse({"error": message}, status_code=500)
            return await call_next(request)

        @api.get("/api/team/mentions")
        async def team_mentions() -> dict[str, Any]:
            self.calls.append(("GET", "/api/team/mentions", None))
            return {"teamMembers": self.roster}

        @api.get("/api/chat/team-members")
        async def chat_team_members() -> dict[str, Any]:
            self.calls.append(("GET", "/api/chat/team-members", None))
            return {"members": self.roster}

        @api.get("/api/stages/{stage_id}/design-sections")
        async def design_sections(stage_id: str) -> Any:
            self.calls.append(("GET", f"/api/stages/{stage_id}/design-sections", None))
            if stage_id != "stage-1":
                return JSONResponse({"error": "Stage not found"}, status_code=404)
            return self.workspace

        @api.get("/api/design/sections")
        async def list_sections(stageId: str) -> dict[str, Any]:  # noqa: N803
            self.calls.append(("GET", "/api/design/sections", {"stageId": stageId}))
            return {"success": True, "sections": self.workspace["sections"]}

        @api.post("/api/design/sections")
        async def get_or_create_section(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", "/api/design/sections", body))
            section = next((s for s in self.workspace["sections"] if s["type"] == body["type"]), None)
            if section is None:
                section = {"id": f"sec-{body['type'].lower()}", "type": body["type"], "comments": []}
                self.workspace["sections"].append(section)
            return {"success": True, "section": section}

        @api.patch("/api/design/sections/{section_id}/complete")
        async def complete_section(section_id: str, request: Request) -> Any:
            body = await request.json()
            self.calls.append(("PATCH", f"/api/design/sections/{section_id}/complete", body))
            section = self._section(section_id)
            if section is None:
                return JSONResponse({"error": "Section not found"}, status_code=404)
            section["completed"] = body["completed"]
            return {"section": section}

        @api.patch("/api/design/sections/{section_id}")
        async def update_section(section_id: str, request: Request) -> Any:
            body = await request.json()
            self.calls.append(("PATCH", f"/api/design/sections/{section_id}", body))
            section = self._section(section_id)
            if section is None:
                return JSONResponse({"error": "Section not found"}, status_code=404)
            section.update(body)
            return {"section": section}

        @api.post("/api/design/comments")
        async def create_comment(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", "/api/design/comments", body))
            comment = {
                "id": "c-new",
                "content": body["content"],
                "authorId": "u1",
                "createdAt": iso(10),
                "parentId": body.get("parentId"),
                "mentions": json.dumps(body["mentions"]),
            }
            return {"success": True, "comment": comment}

        @api.patch("/api/comments/{comment_id}")
        async def edit_comment(comment_id: str, request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("PATCH", f"/api/comments/{comment_id}", body))
            return {"comment": {"id": comment_id, "content": body["content"], "createdAt": iso(1), "updatedAt": iso(30)}}

        @api.delete("/api/comments/{comment_id}")
        async def delete_comment(comment_id: str) -> dict[str, Any]:
            self.calls.append(("DELETE", f"/api/comments/{comment_id}", None))
            return {"success": True}

        @api.post("/api/comments/{comment_id}/like")
        async def like_comment(comment_id: str) -> dict[str, Any]:
            self.calls.append(("POST", f"/api/comments/{comment_id}/like", None))
            return {"success": True}

        @api.post("/api/comments/{comment_id}/pin")
        async def pin_comment(comment_id: str, request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", f"/api/comments/{comment_id}/pin", body))
            return {"success": True}

        @api.post("/api/design/checklist")
        async def add_checklist_item(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", "/api/design/checklist", body))
            return {"success": True, "item": {"id": "i-new", "text": body["text"], "order": body.get("order", 3)}}

        @api.put("/api/design/checklist")
        async def update_checklist_item(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("PUT", "/api/design/checklist", body))
            return {"success": True, "item": {"id": body["itemId"], "text": body.get("text", ""), "order": 0}}

        @api.delete("/api/design/checklist")
        async def delete_checklist_item(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("DELETE", "/api/design/checklist", body))
            return {"success": True}

        @api.post("/api/design/upload")
        async def upload(request: Request) -> Any:
            body = await request.body()
            filenames = re.findall(rb'filename="([^"]+)"', body)
            filename = filenames[0].decode() if filenames else ""
            self.calls.append(("POST", "/api/design/upload", {"filename": filename, "has_section": b'name="sectionId"' in body}))
            if filename.startswith("broken"):
                return JSONResponse({"success": False, "error": "Storage unavailable"}, status_code=500)
            asset = {"id": f"asset-{filename}", "url": f"https://cdn.test/{filename}", "originalName": filename}
            return {"success": True, "assets": [asset]}

        @api.delete("/api/design/assets/{asset_id}")
        async def delete_asset(asset_id: str) -> Any:
            self.calls.append(("DELETE", f"/api/design/assets/{asset_id}", None))
            if asset_id == "missing":
                return JSONResponse({"error": "Asset not found"}, status_code=404)
            return {"success": True}

        @api.get("/api/design/notifications")
        async def notifications(stageId: str) -> dict[str, Any]:  # noqa: N803
            self.calls.append(("GET", "/api/design/notifications", {"stageId": stageId}))
            return {"notifications": self.notifications}

        @api.patch("/api/design/notifications/read-all")
        async def read_all(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("PATCH", "/api/design/notifications/read-all", body))
            for notification in self.notifications:
                notification["read"] = True
            return {"success": True}

        @api.patch("/api/design/notifications/{notification_id}/read")
        async def read_one(notification_id: str) -> dict[str, Any]:
            self.calls.append(("PATCH", f"/api/design/notifications/{notification_id}/read", None))
            for notification in self.notifications:
                if notification["id"] == notification_id:
                    notification["read"] = True
            return {"success": True}

        @api.get("/api/deliveries")
        async def list_deliveries(orderId: str) -> dict[str, Any]:  # noqa: N803
            self.calls.append(("GET", "/api/deliveries", {"orderId": orderId}))
            return {"deliveries": self.deliveries}

        @api.post("/api/deliveries")
        async def create_delivery(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", "/api/deliveries", body))
            delivery = {"id": f"d{len(self.deliveries) + 1}", "status": body.get("status", "PENDING"), **body}
            self.deliveries.append(delivery)
            return {"success": True, "delivery": delivery}

        @api.patch("/api/design/assets/{asset_id}")
        async def update_asset(asset_id: str, request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("PATCH", f"/api/design/assets/{asset_id}", body))
            return {"asset": {"id": asset_id, "url": f"https://cdn.test/{asset_id}", "caption": body["caption"]}}

        @api.patch("/api/deliveries/{delivery_id}")
        async def update_delivery(delivery_id: str, request: Request) -> Any:
            body = await request.json()
            self.calls.append(("PATCH", f"/api/deliveries/{delivery_id}", body))
            delivery = next((d for d in self.deliveries if d["id"] == delivery_id), None)
            if delivery is None:
                return JSONResponse({"error": "Delivery not found"}, status_code=404)
            delivery.update(body)
            return {"delivery": delivery}

        @api.get("/api/rfq/supplier-quote")
        async def quote_preview(projectId: str, itemIds: str) -> dict[str, Any]:  # noqa: N803
            self.calls.append(("GET", "/api/rfq/supplier-quote", {"projectId": projectId, "itemIds": itemIds}))
            return self.quote_preview

        @api.post("/api/rfq/supplier-quote")
        async def send_quotes(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", "/api/rfq/supplier-quote", body))
            suppliers = {item.get("supplierId") or item.get("supplierName") for item in body["items"]}
            return {"success": True, "sent": len(suppliers)}

        @api.get("/api/projects/{project_id}/updates")
        async def list_updates(project_id: str) -> dict[str, Any]:
            self.calls.append(("GET", f"/api/projects/{project_id}/updates", None))
            return {"updates": [{"id": "upd-0", "type": "MILESTONE", "priority": "HIGH", "title": "Design signed off"}]}

        @api.put("/api/projects/{project_id}/updates/{update_id}")
        async def edit_update(project_id: str, update_id: str, request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("PUT", f"/api/projects/{project_id}/updates/{update_id}", body))
            return {"update": {"id": update_id, **body}}

        @api.delete("/api/projects/{project_id}/updates/{update_id}")
        async def delete_update(project_id: str, update_id: str) -> dict[str, Any]:
            self.calls.append(("DELETE", f"/api/projects/{project_id}/updates/{update_id}", None))
            return {"success": True}

        @api.post("/api/projects/{project_id}/updates")
        async def create_update(project_id: str, request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", f"/api/projects/{project_id}/updates", body))
            return {"id": "upd-1", "createdAt": iso(20), **body}

        @api.post("/api/blob-upload")
        async def blob_ticket(request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", "/api/blob-upload", body))
            pathname = body["pathname"]
            return {"url": f"https://blob.test/{pathname}", "uploadUrl": f"http://testserver/blob-store/{pathname}", "token": "blob-token"}

        @api.put("/blob-store/{pathname:path}")
        async def blob_put(pathname: str, request: Request) -> Any:
            body = await request.body()
            self.calls.append(("PUT", "/blob-store", {"pathname": pathname, "auth": request.headers.get("authorization"), "size": len(body)}))
            if "broken" in pathname:
                return JSONResponse({"error": "Blob store rejected upload"}, status_code=500)
            return {"ok": True}

        @api.post("/api/projects/{project_id}/updates/{update_id}/blob-photo")
        async def register_photo(project_id: str, update_id: str, request: Request) -> dict[str, Any]:
            body = await request.json()
            self.calls.append(("POST", f"/api/projects/{project_id}/updates/{update_id}/blob-photo", body))
            return {"photo": {"id": f"photo-{body['filename']}", "blobUrl": body["blobUrl"], "caption": body["caption"]}}

        return api


@pytest.fixture
def fake_api():
    return FakeDesignApi()


@pytest.fixture
def config():
    return Config(api_url="http://testserver", api_token="secret", notification_poll_interval=0.01, workspace_poll_interval=0.01)


@pytest.fixture
def app(fake_api, config):
    """App wired to the fake API through an in-process ASGI transport."""
    return App(config, transport=httpx.ASGITransport(app=fake_api.app))
