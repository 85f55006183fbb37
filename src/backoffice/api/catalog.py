"""Catalog resources: products, categories and brands.

Request bodies use the same field names as the purchase request
(``nombre``, ``descripcion``, ``precio``, ``cantidad_disponible``,
``categoria_id``, ``marca_id``).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from backoffice.api.responses import ApiResponse, error_response
from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.list_products import ListProductsHandler, ShowProductHandler
from backoffice.application.manage_classification import (
    AddClassificationHandler,
    ClassificationKind,
    DeleteClassificationHandler,
    ListClassificationsHandler,
    ShowClassificationHandler,
    UpdateClassificationHandler,
)
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import DomainException, ValidationError
from backoffice.domain.model.value_objects import MAX_INTEGER
from backoffice.domain.repository.unit_of_work import UnitOfWork


class ProductResource:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def index(self) -> ApiResponse:
        try:
            products = ListProductsHandler(self._uow_factory()).handle()
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Products loaded successfully", 200, products)

    def store(self, payload: Any) -> ApiResponse:
        try:
            body = _body(payload)
            dto = AddProductHandler(self._uow_factory()).handle(
                name=body.get("nombre") or "",
                price=_text(body.get("precio"), "precio"),
                stock=_integer(body.get("cantidad_disponible", 0), "cantidad_disponible"),
                description=body.get("descripcion") or "",
                category_id=_optional_integer(body.get("categoria_id"), "categoria_id"),
                brand_id=_optional_integer(body.get("marca_id"), "marca_id"),
            )
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Product created successfully", 201, dto)

    def show(self, product_id: int) -> ApiResponse:
        try:
            dto = ShowProductHandler(self._uow_factory()).handle(product_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Product loaded successfully", 200, dto)

    def update(self, product_id: int, payload: Any) -> ApiResponse:
        try:
            body = _body(payload)
            dto = UpdateProductHandler(self._uow_factory()).handle(
                product_id,
                new_price=_optional_text(body.get("precio"), "precio"),
                new_stock=_optional_integer(body.get("cantidad_disponible"), "cantidad_disponible"),
                new_name=_optional_text(body.get("nombre"), "nombre"),
                new_description=_optional_text(body.get("descripcion"), "descripcion"),
                new_category_id=_optional_integer(body.get("categoria_id"), "categoria_id"),
                new_brand_id=_optional_integer(body.get("marca_id"), "marca_id"),
            )
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Product updated successfully", 200, dto)

    def destroy(self, product_id: int) -> ApiResponse:
        try:
            dto = DeleteProductHandler(self._uow_factory()).handle(product_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Product deleted successfully", 200, dto)


class ClassificationResource:
    """Categories or brands, depending on ``kind``."""

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        kind: ClassificationKind,
    ) -> None:
        self._uow_factory = uow_factory
        self._kind = kind

    def index(self) -> ApiResponse:
        try:
            entities = ListClassificationsHandler(self._uow_factory(), self._kind).handle()
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success(f"{self._plural} loaded successfully", 200, entities)

    def store(self, payload: Any) -> ApiResponse:
        try:
            body = _body(payload)
            dto = AddClassificationHandler(self._uow_factory(), self._kind).handle(
                name=body.get("nombre") or "",
                description=body.get("descripcion") or "",
            )
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success(f"{self._kind.value} created successfully", 201, dto)

    def show(self, entity_id: int) -> ApiResponse:
        try:
            dto = ShowClassificationHandler(self._uow_factory(), self._kind).handle(entity_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success(f"{self._kind.value} loaded successfully", 200, dto)

    def update(self, entity_id: int, payload: Any) -> ApiResponse:
        try:
            body = _body(payload)
            dto = UpdateClassificationHandler(self._uow_factory(), self._kind).handle(
                entity_id,
                name=_optional_text(body.get("nombre"), "nombre"),
                description=_optional_text(body.get("descripcion"), "descripcion"),
            )
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success(f"{self._kind.value} updated successfully", 200, dto)

    def destroy(self, entity_id: int) -> ApiResponse:
        try:
            dto = DeleteClassificationHandler(self._uow_factory(), self._kind).handle(entity_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success(f"{self._kind.value} deleted successfully", 200, dto)

    def products(self, entity_id: int) -> ApiResponse:
        """List the products filed under one category or brand."""
        handler = ListProductsHandler(self._uow_factory())
        try:
            if self._kind is ClassificationKind.CATEGORY:
                products = handler.handle(category_id=entity_id)
            else:
                products = handler.handle(brand_id=entity_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Products loaded successfully", 200, products)

    @property
    def _plural(self) -> str:
        return "Categories" if self._kind is ClassificationKind.CATEGORY else "Brands"


# --- Body helpers -------------------------------------------------------------


def _body(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be an object")
    return payload


def _text(value: Any, name: str) -> str:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"The {name} field is required")
    return str(value)


def _optional_text(value: Any, name: str) -> str | None:
    return None if value is None else _text(value, name)


def _integer(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"The {name} field must be an integer")
    if abs(value) > MAX_INTEGER:
        raise ValidationError(f"The {name} field is out of range")
    return value


def _optional_integer(value: Any, name: str) -> int | None:
    return None if value is None else _integer(value, name)
