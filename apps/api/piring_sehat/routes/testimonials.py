"""Testimonial routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from piring_sehat.routes.dependencies import Principal, get_testimonial_service
from piring_sehat.schemas.error import ErrorResponse
from piring_sehat.schemas.testimonial import CreateTestimonialRequest, Testimonial
from piring_sehat.services.testimonials import TestimonialService

router = APIRouter(prefix="/testimonials", tags=["Testimonials"])


@router.get("", response_model=list[Testimonial])
def list_testimonials(
    service: Annotated[TestimonialService, Depends(get_testimonial_service)],
) -> list[Testimonial]:
    return service.list_all()


@router.get(
    "/user/{userId}",
    response_model=list[Testimonial],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def list_user_testimonials(
    user_id: Annotated[str, Path(alias="userId", min_length=1)],
    service: Annotated[TestimonialService, Depends(get_testimonial_service)],
) -> list[Testimonial]:
    return service.list_for_user(user_id=user_id)


@router.post(
    "",
    response_model=Testimonial,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_testimonial(
    payload: CreateTestimonialRequest,
    principal: Principal,
    service: Annotated[TestimonialService, Depends(get_testimonial_service)],
) -> Testimonial:
    return service.create(principal=principal, payload=payload)
