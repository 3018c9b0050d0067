"""Data Flow application kind."""

from __future__ import annotations

from typing import Any

from ..constants import KIND_DATAFLOW_APPLICATION, SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME
from ..exceptions import ValidationError
from ..reconcile.drift import FieldMapping, string_map
from ..reconcile.lifecycle import LifecycleClassifier
from .base import TAG_FIELDS, ResourceKind, common_create_fields, optional_fields

APPLICATION_STATES = ("ACTIVE", "DELETED", "INACTIVE")
LANGUAGES = ("PYTHON", "SCALA", "JAVA", "SQL")

OPTIONAL_FIELDS = {
    "fileUri": "file_uri",
    "className": "class_name",
    "arguments": "arguments",
    "configuration": "configuration",
    "description": "description",
    "logsBucketUri": "logs_bucket_uri",
    "warehouseBucketUri": "warehouse_bucket_uri",
    "archiveUri": "archive_uri",
}


class DataFlowApplicationKind(ResourceKind):
    """Applications are created synchronously and have no creating state.

    A DELETED application was removed outside the operator and is reported
    as failed rather than silently recreated.
    """

    name = KIND_DATAFLOW_APPLICATION
    plural = "dataflowapplications"
    live_states = frozenset({"ACTIVE", "INACTIVE"})
    lifecycle = LifecycleClassifier(
        active=frozenset({"ACTIVE"}),
        failed=frozenset({"DELETED"}),
        states=APPLICATION_STATES,
    )
    update_fields = (
        FieldMapping(SPEC_DISPLAY_NAME, "display_name"),
        FieldMapping("driverShape", "driver_shape"),
        FieldMapping("executorShape", "executor_shape"),
        FieldMapping("numExecutors", "num_executors"),
        FieldMapping("sparkVersion", "spark_version"),
        FieldMapping("fileUri", "file_uri"),
        FieldMapping("className", "class_name"),
        FieldMapping("arguments", "arguments"),
        FieldMapping("configuration", "configuration", string_map),
        FieldMapping("description", "description"),
        *TAG_FIELDS,
    )
    required_fields = (
        SPEC_COMPARTMENT_ID,
        SPEC_DISPLAY_NAME,
        "language",
        "driverShape",
        "executorShape",
        "numExecutors",
        "sparkVersion",
    )

    def validate(self, spec: dict[str, Any]) -> None:
        super().validate(spec)
        language = spec.get("language")
        if not self.explicit_id(spec) and language not in LANGUAGES:
            raise ValidationError(
                f"invalid language {language!r}: must be one of {', '.join(LANGUAGES)}",
                field="language",
            )

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details = common_create_fields(spec)
        details.update({
            "language": spec.get("language"),
            "driver_shape": spec.get("driverShape"),
            "executor_shape": spec.get("executorShape"),
            "num_executors": spec.get("numExecutors"),
            "spark_version": spec.get("sparkVersion"),
        })
        details.update(optional_fields(spec, OPTIONAL_FIELDS))
        return details
