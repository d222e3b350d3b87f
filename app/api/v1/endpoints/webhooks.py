"""Webhook subscription API: thin routes delegating to WebhookSubscriptionRepository."""

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.dependencies import get_webhook_repo, get_webhook_repo_for_write
from app.application.dtos.webhook import WebhookSubscriptionCreate
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import WebhookSubscriptionRepository
from app.schemas.webhook import WebhookCreateRequest, WebhookResponse, WebhookUpdate

router = APIRouter()


@router.post("", response_model=WebhookResponse, status_code=201)
async def create_webhook(
    body: WebhookCreateRequest,
    webhook_repo: WebhookSubscriptionRepository = Depends(get_webhook_repo_for_write),
):
    """Subscribe an endpoint to one trigger_event."""
    subscription = await webhook_repo.create_subscription(
        WebhookSubscriptionCreate(**body.model_dump())
    )
    return WebhookResponse.model_validate(subscription)


@router.get("", response_model=list[WebhookResponse])
async def list_webhooks(
    trigger_event: str | None = Query(None, description="Filter by trigger event"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    webhook_repo: WebhookSubscriptionRepository = Depends(get_webhook_repo),
):
    """List subscriptions with their delivery statistics."""
    subscriptions = await webhook_repo.list_subscriptions(
        trigger_event=trigger_event, skip=skip, limit=limit
    )
    return [WebhookResponse.model_validate(s) for s in subscriptions]


@router.get("/{webhook_id}", response_model=WebhookResponse)
async def get_webhook(
    webhook_id: str,
    webhook_repo: WebhookSubscriptionRepository = Depends(get_webhook_repo),
):
    subscription = await webhook_repo.get_subscription(webhook_id)
    if subscription is None:
        raise ResourceNotFoundException("webhook", webhook_id)
    return WebhookResponse.model_validate(subscription)


@router.patch("/{webhook_id}", response_model=WebhookResponse)
async def update_webhook(
    webhook_id: str,
    body: WebhookUpdate,
    webhook_repo: WebhookSubscriptionRepository = Depends(get_webhook_repo_for_write),
):
    """Partial update (name, URL, method, trigger, active flag)."""
    subscription = await webhook_repo.update_subscription(
        webhook_id, body.model_dump(exclude_unset=True)
    )
    if subscription is None:
        raise ResourceNotFoundException("webhook", webhook_id)
    return WebhookResponse.model_validate(subscription)


@router.delete("/{webhook_id}", status_code=204)
async def delete_webhook(
    webhook_id: str,
    webhook_repo: WebhookSubscriptionRepository = Depends(get_webhook_repo_for_write),
):
    if not await webhook_repo.delete_subscription(webhook_id):
        raise ResourceNotFoundException("webhook", webhook_id)
    return Response(status_code=204)
