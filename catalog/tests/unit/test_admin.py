import uuid
from unittest.mock import MagicMock, patch

import pytest
from django.contrib import admin, messages
from django.test import RequestFactory

from catalog.admin import ProductAdmin
from catalog.domain.services import ErrorCodes, service_err, service_ok
from catalog.models import Product


@pytest.fixture
def product_admin():
    return ProductAdmin(Product, admin.site)


@pytest.fixture
def request_():
    return RequestFactory().post("/admin/catalog/product/")


@pytest.fixture
def mock_service():
    service = MagicMock()
    with patch("catalog.admin.container") as mock_container:
        mock_container.product_service.return_value = service
        yield service


@pytest.mark.unit
class TestProductAdminDelete:
    def test_delete_model_goes_through_service(self, product_admin, request_, mock_service):
        mock_service.delete_product.return_value = service_ok(True)
        product = MagicMock(id=uuid.uuid4())

        with patch.object(ProductAdmin, "message_user") as message_user:
            product_admin.delete_model(request_, product)

        mock_service.delete_product.assert_called_once_with(str(product.id))
        message_user.assert_not_called()

    def test_delete_model_reports_failure(self, product_admin, request_, mock_service):
        mock_service.delete_product.return_value = service_err(
            ErrorCodes.PERSISTENCE_ERROR, "Failed to delete product"
        )
        product = MagicMock(id=uuid.uuid4())

        with patch.object(ProductAdmin, "message_user") as message_user:
            product_admin.delete_model(request_, product)

        message_user.assert_called_once()
        assert "Failed to delete product" in message_user.call_args.args[1]
        assert message_user.call_args.kwargs["level"] == messages.ERROR

    def test_delete_queryset_reports_only_failed_products(self, product_admin, request_, mock_service):
        ok_id, failed_id = uuid.uuid4(), uuid.uuid4()
        queryset = MagicMock()
        queryset.values_list.return_value = [ok_id, failed_id]
        mock_service.delete_product.side_effect = [
            service_ok(True),
            service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found"),
        ]

        with patch.object(ProductAdmin, "message_user") as message_user:
            product_admin.delete_queryset(request_, queryset)

        assert mock_service.delete_product.call_count == 2
        message_user.assert_called_once()
        text = message_user.call_args.args[1]
        assert str(failed_id) in text
        assert str(ok_id) not in text
        assert message_user.call_args.kwargs["level"] == messages.ERROR
