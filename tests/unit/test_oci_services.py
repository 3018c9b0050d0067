"""Tests for the OCI SDK adapters."""

from __future__ import annotations

from unittest.mock import MagicMock, Mock, patch

import oci
import pytest

from oci_service_operator.config import OperatorConfig
from oci_service_operator.exceptions import (
    MalformedIdentityError,
    RemoteBadRequestError,
    RemoteNotFoundError,
    RemoteServiceError,
)
from oci_service_operator.services.oci import (
    DataFlowServiceClient,
    DeploymentServiceClient,
    GatewayServiceClient,
    NatGatewayServiceClient,
    ObjectStorageServiceClient,
    OpenSearchServiceClient,
    QueueServiceClient,
    create_client,
)
from oci_service_operator.services.oci.base import (
    OCIServiceClient,
    client_kwargs,
    load_oci_config,
    to_remote,
    translate_service_error,
    work_request_id,
)


def response(data=None, headers=None):
    return Mock(data=data, headers=headers or {})


def service_error(status, code="Error", message="boom"):
    return oci.exceptions.ServiceError(status, code, {}, message)


class TestErrorTranslation:
    """Test cases for translate_service_error."""

    def test_not_found(self):
        """Test that 404 maps to RemoteNotFoundError."""
        error = translate_service_error("queue", "get_queue", service_error(404, "NotAuthorizedOrNotFound"))

        assert isinstance(error, RemoteNotFoundError)
        assert error.status == 404

    def test_bad_request(self):
        """Test that 400 maps to a non-retryable RemoteBadRequestError."""
        error = translate_service_error("queue", "create_queue", service_error(400, "InvalidParameter"))

        assert isinstance(error, RemoteBadRequestError)
        assert error.retryable is False
        assert error.code == "InvalidParameter"

    @pytest.mark.parametrize("status", [429, 500, 503])
    def test_retryable_statuses(self, status):
        """Test that throttling and server errors stay retryable."""
        error = translate_service_error("queue", "get_queue", service_error(status))

        assert type(error) is RemoteServiceError
        assert error.retryable is True

    def test_forbidden_is_not_retryable(self):
        """Test that authorization failures are not retried blindly."""
        assert translate_service_error("queue", "get_queue", service_error(403)).retryable is False

    def test_message_is_sanitized(self):
        """Test that tenancy OCIDs do not leak into error messages."""
        error = translate_service_error(
            "queue",
            "get_queue",
            service_error(500, message="tenancy ocid1.tenancy.oc1..aaaaaaaabbbbbbbb is throttled"),
        )

        assert "aaaaaaaabbbbbbbb" not in str(error)


class TestOCIServiceClient:
    """Test cases for the adapter base class."""

    def test_service_error_is_translated(self):
        """Test that SDK service errors surface as operator errors."""
        adapter = OCIServiceClient(MagicMock())
        failing = Mock(side_effect=service_error(404))

        with pytest.raises(RemoteNotFoundError):
            adapter._call("get_thing", failing, "ocid1.x")

    def test_transport_error_is_retryable(self):
        """Test that transport failures surface as retryable remote errors."""
        adapter = OCIServiceClient(MagicMock())
        failing = Mock(side_effect=oci.exceptions.RequestException("connection reset"))

        with pytest.raises(RemoteServiceError) as exc_info:
            adapter._call("get_thing", failing)

        assert exc_info.value.retryable is True

    def test_rate_limiter_is_consulted(self):
        """Test that every call waits on the rate limiter."""
        limiter = Mock()
        limiter.acquire.return_value = 0.0
        adapter = OCIServiceClient(MagicMock(), rate_limiter=limiter)

        adapter._call("get_thing", Mock(return_value="ok"))

        limiter.acquire.assert_called_once()

    def test_to_remote(self):
        """Test that SDK models become RemoteObjects with snake_case fields."""
        model = oci.apigateway.models.Gateway(
            id="ocid1.gw.1",
            display_name="gw",
            lifecycle_state="ACTIVE",
            hostname="gw.example.com",
        )

        remote = to_remote(model)

        assert remote.id == "ocid1.gw.1"
        assert remote.display_name == "gw"
        assert remote.lifecycle_state == "ACTIVE"
        assert remote.get("hostname") == "gw.example.com"

    def test_work_request_id(self):
        """Test that the work request id is read from the response headers."""
        assert work_request_id(response(headers={"opc-work-request-id": "ocid1.wr.1"})) == "ocid1.wr.1"
        assert work_request_id(response()) is None

    def test_client_kwargs(self):
        """Test that SDK clients get a timeout and no built-in retries."""
        kwargs = client_kwargs(45.0)

        assert kwargs["timeout"] == (10.0, 45.0)
        assert isinstance(kwargs["retry_strategy"], oci.retry.NoneRetryStrategy)


class TestLoadConfig:
    """Test cases for load_oci_config."""

    @patch("oci_service_operator.services.oci.base.oci.config.validate_config")
    @patch("oci_service_operator.services.oci.base.oci.config.from_file")
    def test_region_override(self, mock_from_file, mock_validate):
        """Test that the configured region replaces the profile's."""
        mock_from_file.return_value = {"region": "us-phoenix-1", "tenancy": "t"}

        config = load_oci_config("/etc/oci/config", "OPS", "eu-frankfurt-1")

        mock_from_file.assert_called_once_with(file_location="/etc/oci/config", profile_name="OPS")
        assert config["region"] == "eu-frankfurt-1"
        mock_validate.assert_called_once_with(config)


class TestGatewayServiceClient:
    """Test cases for GatewayServiceClient."""

    def test_create(self):
        """Test that create builds the SDK details model."""
        sdk = MagicMock()
        sdk.create_gateway.return_value = response(
            oci.apigateway.models.Gateway(id="ocid1.gw.1", display_name="gw", lifecycle_state="CREATING"),
            {"opc-work-request-id": "ocid1.wr.1"},
        )

        result = GatewayServiceClient(sdk).create({
            "compartment_id": "c",
            "display_name": "gw",
            "endpoint_type": "PUBLIC",
            "subnet_id": "s",
        })

        details = sdk.create_gateway.call_args[0][0]
        assert isinstance(details, oci.apigateway.models.CreateGatewayDetails)
        assert details.endpoint_type == "PUBLIC"
        assert result.obj.id == "ocid1.gw.1"
        assert result.work_request_id == "ocid1.wr.1"

    def test_list(self):
        """Test that list passes scope, name and limit."""
        sdk = MagicMock()
        sdk.list_gateways.return_value = response(
            Mock(items=[oci.apigateway.models.GatewaySummary(id="ocid1.gw.1", display_name="gw", lifecycle_state="ACTIVE")])
        )

        items = GatewayServiceClient(sdk).list("c", "gw", 10)

        sdk.list_gateways.assert_called_once_with("c", display_name="gw", limit=10)
        assert [i.id for i in items] == ["ocid1.gw.1"]

    def test_update_returns_none(self):
        """Test that the asynchronous update hands back no object."""
        sdk = MagicMock()

        assert GatewayServiceClient(sdk).update("ocid1.gw.1", {"display_name": "new"}) is None
        assert isinstance(sdk.update_gateway.call_args[0][1], oci.apigateway.models.UpdateGatewayDetails)


class TestDeploymentServiceClient:
    """Test cases for DeploymentServiceClient."""

    def test_create_builds_specification(self):
        """Test that the normalized route table becomes an ApiSpecification."""
        sdk = MagicMock()
        sdk.create_deployment.return_value = response(
            oci.apigateway.models.Deployment(id="ocid1.dep.1", display_name="api", lifecycle_state="CREATING")
        )

        DeploymentServiceClient(sdk).create({
            "compartment_id": "c",
            "display_name": "api",
            "gateway_id": "ocid1.gw.1",
            "path_prefix": "/v1",
            "routes": [
                {"path": "/a", "methods": ["GET"], "backend": {"type": "HTTP_BACKEND", "url": "https://h"}},
                {"path": "/b", "methods": [], "backend": {"type": "ORACLE_FUNCTIONS_BACKEND", "function_id": "ocid1.fn.1"}},
                {"path": "/c", "methods": ["GET"], "backend": {"type": "STOCK_RESPONSE_BACKEND", "status": 204, "body": None}},
            ],
        })

        details = sdk.create_deployment.call_args[0][0]
        routes = details.specification.routes
        assert isinstance(routes[0].backend, oci.apigateway.models.HTTPBackend)
        assert routes[0].backend.url == "https://h"
        assert isinstance(routes[1].backend, oci.apigateway.models.OracleFunctionBackend)
        assert routes[1].methods is None
        assert isinstance(routes[2].backend, oci.apigateway.models.StockResponseBackend)
        assert routes[2].backend.status == 204

    def test_list_filters_by_gateway(self):
        """Test that the gateway filter is passed through."""
        sdk = MagicMock()
        sdk.list_deployments.return_value = response(Mock(items=[]))

        DeploymentServiceClient(sdk).list("c", "api", 10, gateway_id="ocid1.gw.1")

        sdk.list_deployments.assert_called_once_with("c", display_name="api", limit=10, gateway_id="ocid1.gw.1")


class TestObjectStorageServiceClient:
    """Test cases for ObjectStorageServiceClient."""

    def bucket(self):
        return oci.object_storage.models.Bucket(
            namespace="ns",
            name="data",
            compartment_id="c",
            public_access_type="NoPublicAccess",
        )

    def test_get_uses_composite_id(self):
        """Test that the composite id is split into namespace and name."""
        sdk = MagicMock()
        sdk.get_bucket.return_value = response(self.bucket())

        remote = ObjectStorageServiceClient(sdk).get("ns/data")

        sdk.get_bucket.assert_called_once_with("ns", "data")
        assert remote.id == "ns/data"
        assert remote.lifecycle_state == "ACTIVE"

    def test_get_rejects_malformed_id(self):
        """Test that a malformed id never reaches the SDK."""
        sdk = MagicMock()

        with pytest.raises(MalformedIdentityError):
            ObjectStorageServiceClient(sdk).get("invalid")

        sdk.get_bucket.assert_not_called()

    def test_list_missing_bucket(self):
        """Test that a lookup of a missing bucket finds nothing."""
        sdk = MagicMock()
        sdk.get_bucket.side_effect = service_error(404, "BucketNotFound")

        assert ObjectStorageServiceClient(sdk).list("ns", "data", 10) == []

    def test_create(self):
        """Test that the namespace is passed separately from the details."""
        sdk = MagicMock()
        sdk.create_bucket.return_value = response(self.bucket())

        result = ObjectStorageServiceClient(sdk).create({
            "namespace_name": "ns",
            "name": "data",
            "compartment_id": "c",
            "storage_tier": "Standard",
        })

        namespace, details = sdk.create_bucket.call_args[0]
        assert namespace == "ns"
        assert details.storage_tier == "Standard"
        assert result.obj.id == "ns/data"

    def test_get_namespace(self):
        """Test the tenancy namespace lookup."""
        sdk = MagicMock()
        sdk.get_namespace.return_value = response("tenancyns")

        assert ObjectStorageServiceClient(sdk).get_namespace("c") == "tenancyns"
        sdk.get_namespace.assert_called_once_with(compartment_id="c")

    def test_delete(self):
        """Test that delete addresses the bucket by namespace and name."""
        sdk = MagicMock()

        ObjectStorageServiceClient(sdk).delete("ns/data")

        sdk.delete_bucket.assert_called_once_with("ns", "data")


class TestWorkRequestServices:
    """Test cases for services whose create returns a work request."""

    def test_opensearch_create(self):
        """Test that cluster creation returns only the work request id."""
        sdk = MagicMock()
        sdk.create_opensearch_cluster.return_value = response(None, {"opc-work-request-id": "ocid1.wr.os"})

        result = OpenSearchServiceClient(sdk).create({"compartment_id": "c", "display_name": "search"})

        assert result.obj is None
        assert result.work_request_id == "ocid1.wr.os"

    def test_queue_create(self):
        """Test that queue creation returns only the work request id."""
        sdk = MagicMock()
        sdk.create_queue.return_value = response(None, {"opc-work-request-id": "ocid1.wr.q"})

        result = QueueServiceClient(sdk).create({"compartment_id": "c", "display_name": "orders", "retention_in_seconds": 3600})

        details = sdk.create_queue.call_args[0][0]
        assert details.retention_in_seconds == 3600
        assert result.work_request_id == "ocid1.wr.q"

    def test_queue_list(self):
        """Test that queues are listed by keyword arguments."""
        sdk = MagicMock()
        sdk.list_queues.return_value = response(Mock(items=[]))

        QueueServiceClient(sdk).list("c", "orders", 10)

        sdk.list_queues.assert_called_once_with(compartment_id="c", display_name="orders", limit=10)


class TestObjectReturningServices:
    """Test cases for Data Flow and NAT gateway adapters."""

    def test_dataflow_list_returns_plain_list(self):
        """Test that Data Flow summaries come back as a plain list."""
        sdk = MagicMock()
        sdk.list_applications.return_value = response([
            oci.data_flow.models.ApplicationSummary(id="ocid1.app.1", display_name="etl", lifecycle_state="ACTIVE")
        ])

        items = DataFlowServiceClient(sdk).list("c", "etl", 10)

        assert items[0].id == "ocid1.app.1"

    def test_dataflow_update_returns_object(self):
        """Test that the synchronous update returns the application."""
        sdk = MagicMock()
        sdk.update_application.return_value = response(
            oci.data_flow.models.Application(id="ocid1.app.1", display_name="etl", lifecycle_state="ACTIVE", num_executors=2)
        )

        remote = DataFlowServiceClient(sdk).update("ocid1.app.1", {"num_executors": 2})

        assert remote.get("num_executors") == 2

    def test_nat_gateway_list_filters_by_vcn(self):
        """Test that NAT gateways are looked up within their VCN."""
        sdk = MagicMock()
        sdk.list_nat_gateways.return_value = response([])

        NatGatewayServiceClient(sdk).list("c", "nat", 10, vcn_id="ocid1.vcn.1")

        sdk.list_nat_gateways.assert_called_once_with("c", display_name="nat", limit=10, vcn_id="ocid1.vcn.1")

    def test_empty_filters_are_dropped(self):
        """Test that empty filter values are not sent."""
        sdk = MagicMock()
        sdk.list_nat_gateways.return_value = response([])

        NatGatewayServiceClient(sdk).list("c", "nat", 10, vcn_id="")

        sdk.list_nat_gateways.assert_called_once_with("c", display_name="nat", limit=10)


class TestCreateClient:
    """Test cases for the client factory."""

    def test_builds_adapter_with_sdk_client(self):
        """Test that the factory wires SDK client, timeout and rate limiter."""
        sdk_cls = Mock()
        config = OperatorConfig(request_timeout_seconds=20.0, api_rate_limit=5.0)

        with patch.dict(
            "oci_service_operator.services.oci.ADAPTERS",
            {"OciQueue": (QueueServiceClient, sdk_cls)},
        ):
            adapter = create_client("OciQueue", {"region": "eu-frankfurt-1"}, config)

        assert isinstance(adapter, QueueServiceClient)
        assert adapter.client is sdk_cls.return_value
        assert sdk_cls.call_args.kwargs["timeout"] == (10.0, 20.0)
        assert adapter.rate_limiter.min_interval == pytest.approx(0.2)

    def test_unknown_kind(self):
        """Test that an unknown kind is rejected."""
        with pytest.raises(ValueError):
            create_client("Nope", {}, OperatorConfig())
