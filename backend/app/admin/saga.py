"""
Save pipeline for the product form.

Saving a product is several API calls that are not atomic:

    product -> attributes -> images -> main_image

The steps run as a LangGraph graph. Each one records a StepResult. A failure
in `product` or `attributes` stops the graph; the remaining steps are
reported as skipped. Nothing is rolled back: once `product` succeeded the
product stays saved, and the caller gets a `partial` outcome describing
exactly which steps did not complete. Failures of individual images are
logged and recorded but never stop the save.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TypedDict

import httpx
from langgraph.graph import StateGraph, END

from app.admin.client import ApiError, StorefrontClient
from app.admin.drafts import BannerDraft, DeliveryZoneDraft, InventoryDraft, ProductDraft, validate_draft

logger = logging.getLogger(__name__)

STEPS = ("product", "attributes", "images", "main_image")

# errors a step can survive
REQUEST_ERRORS = (ApiError, httpx.HTTPError)


class StepStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"


class SaveOutcome(str, Enum):
    SAVED = "saved"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    step: str
    status: StepStatus
    error: str | None = None
    failures: tuple[str, ...] = ()


@dataclass(frozen=True)
class SaveResult:
    product_id: int | None
    outcome: SaveOutcome
    steps: tuple[StepResult, ...]

    def step(self, name: str) -> StepResult:
        return next(s for s in self.steps if s.step == name)

    @property
    def failed_steps(self) -> list[str]:
        return [s.step for s in self.steps if s.status in (StepStatus.FAILED, StepStatus.PARTIAL)]


class SaveState(TypedDict):
    client: StorefrontClient
    draft: ProductDraft
    product_id: int | None
    created_images: dict
    steps: list
    halted: bool


def _record(state: SaveState, result: StepResult) -> SaveState:
    state["steps"] = [*state["steps"], result]
    if result.status == StepStatus.FAILED and result.step in ("product", "attributes"):
        state["halted"] = True
    log = logger.info if result.status == StepStatus.OK else logger.warning
    log("save product %s: step %s %s", state.get("product_id"), result.step, result.status.value)
    return state


async def product_node(state: SaveState):
    client, draft = state["client"], state["draft"]
    try:
        if draft.is_new:
            saved = await client.create_product(draft.to_payload())
        else:
            saved = await client.update_product(draft.id, draft.to_payload())
    except REQUEST_ERRORS as e:
        return _record(state, StepResult("product", StepStatus.FAILED, error=str(e)))

    state["product_id"] = draft.id if draft.id is not None else saved["id"]
    return _record(state, StepResult("product", StepStatus.OK))


async def attributes_node(state: SaveState):
    client, draft, product_id = state["client"], state["draft"], state["product_id"]
    try:
        if not draft.is_new:
            await client.delete_product_attributes(product_id)
        for payload in draft.specification_payloads(product_id):
            await client.create_attribute(payload)
    except REQUEST_ERRORS as e:
        return _record(state, StepResult("attributes", StepStatus.FAILED, error=str(e)))
    return _record(state, StepResult("attributes", StepStatus.OK))


async def images_node(state: SaveState):
    client, draft, product_id = state["client"], state["draft"], state["product_id"]
    failures = []

    # stored images are replaced wholesale, not diffed
    if not draft.is_new:
        try:
            existing = await client.list_images(product_id)
        except REQUEST_ERRORS as e:
            logger.warning("could not list images of product %s: %s", product_id, e)
            failures.append(f"list images: {e}")
            existing = []
        for img in existing:
            try:
                await client.delete_image(product_id, img["id"])
            except REQUEST_ERRORS as e:
                logger.warning("could not delete image %s of product %s: %s", img["id"], product_id, e)
                failures.append(f"delete image {img['id']}: {e}")

    created = {}
    for position, img in enumerate(draft.images):
        payload = {
            "imageUrl": img.image_url,
            "altText": img.alt_text or None,
            "isMain": False,
        }
        try:
            saved = await client.add_image(product_id, payload)
            created[position] = saved["id"]
        except REQUEST_ERRORS as e:
            logger.warning("could not add image %s to product %s: %s", img.image_url, product_id, e)
            failures.append(f"add image {img.image_url}: {e}")

    state["created_images"] = created
    status = StepStatus.PARTIAL if failures else StepStatus.OK
    return _record(state, StepResult("images", status, failures=tuple(failures)))


async def main_image_node(state: SaveState):
    client, draft, product_id = state["client"], state["draft"], state["product_id"]
    main_position = next((i for i, img in enumerate(draft.images) if img.is_main), None)

    if main_position is None:
        return _record(state, StepResult("main_image", StepStatus.SKIPPED))

    image_id = state["created_images"].get(main_position)
    if image_id is None:
        return _record(state, StepResult("main_image", StepStatus.FAILED, error="main image was not saved"))

    try:
        await client.set_main_image(product_id, image_id)
    except REQUEST_ERRORS as e:
        return _record(state, StepResult("main_image", StepStatus.FAILED, error=str(e)))
    return _record(state, StepResult("main_image", StepStatus.OK))


def _next_or_stop(state: SaveState) -> str:
    return "stop" if state["halted"] else "continue"


def build_save_graph():
    g = StateGraph(SaveState)
    g.add_node("product", product_node)
    g.add_node("attributes", attributes_node)
    g.add_node("images", images_node)
    g.add_node("main_image", main_image_node)

    g.set_entry_point("product")
    g.add_conditional_edges("product", _next_or_stop, {"continue": "attributes", "stop": END})
    g.add_conditional_edges("attributes", _next_or_stop, {"continue": "images", "stop": END})
    g.add_edge("images", "main_image")
    g.add_edge("main_image", END)

    return g.compile()


save_graph = build_save_graph()


def _summarize(state: SaveState) -> SaveResult:
    done = {s.step: s for s in state["steps"]}
    steps = tuple(done.get(name) or StepResult(name, StepStatus.SKIPPED) for name in STEPS)

    if done["product"].status == StepStatus.FAILED:
        outcome = SaveOutcome.FAILED
    elif state["halted"] or any(s.status in (StepStatus.FAILED, StepStatus.PARTIAL) for s in steps):
        outcome = SaveOutcome.PARTIAL
    else:
        outcome = SaveOutcome.SAVED
    return SaveResult(product_id=state["product_id"], outcome=outcome, steps=steps)


async def save_product(client: StorefrontClient, draft: ProductDraft) -> SaveResult:
    """
    Persist a product draft. Raises DraftValidationError before any request
    when required fields are missing.
    """
    validate_draft(draft)

    out = await save_graph.ainvoke(
        {
            "client": client,
            "draft": draft,
            "product_id": draft.id,
            "created_images": {},
            "steps": [],
            "halted": False,
        }
    )
    result = _summarize(out)
    logger.info("product %s saved with outcome %s", result.product_id, result.outcome.value)
    return result


async def save_banner(client: StorefrontClient, draft: BannerDraft) -> dict:
    validate_draft(draft)
    if draft.is_new:
        return await client.create_banner(draft.to_payload())
    return await client.update_banner(draft.id, draft.to_payload())


async def save_delivery_zone(client: StorefrontClient, draft: DeliveryZoneDraft) -> dict:
    validate_draft(draft)
    if draft.is_new:
        return await client.create_delivery_zone(draft.to_payload())
    return await client.update_delivery_zone(draft.id, draft.to_payload())


async def save_inventory_item(client: StorefrontClient, draft: InventoryDraft) -> dict:
    validate_draft(draft)
    if draft.is_new:
        return await client.create_inventory_item(draft.to_payload())
    return await client.update_inventory_item(draft.id, draft.to_payload())
