"""Testimonial service layer."""

import logging

from piring_sehat.repositories.base import DataStore, DataStoreError
from piring_sehat.schemas.auth import AuthPrincipal
from piring_sehat.schemas.testimonial import CreateTestimonialRequest, Testimonial
from piring_sehat.services.store_errors import store_call

logger = logging.getLogger(__name__)


class TestimonialService:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def list_all(self) -> list[Testimonial]:
        """List every testimonial; the public wall degrades to empty when the store fails."""
        try:
            records = self._store.list_testimonials()
        except DataStoreError:
            logger.exception("testimonials.list_failed")
            return []
        return [Testimonial.model_validate(record) for record in records]

    def list_for_user(self, *, user_id: str) -> list[Testimonial]:
        with store_call("testimonials.list_for_user", "Failed to fetch user testimonials"):
            records = self._store.list_testimonials_for_user(user_id)
        return [Testimonial.model_validate(record) for record in records]

    def create(self, *, principal: AuthPrincipal, payload: CreateTestimonialRequest) -> Testimonial:
        with store_call("testimonials.create", "Failed to add testimonial"):
            record = self._store.create_testimonial(
                user_id=principal.user_id,
                username=payload.username,
                job=payload.job,
                message=payload.message,
            )
        return Testimonial.model_validate(record)
