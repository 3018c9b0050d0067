"""Constants for the OCI Service Operator."""

# API Group
API_GROUP = "oci.oracle.com"
API_VERSION = "v1beta1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_API_GATEWAY = "ApiGateway"
KIND_API_GATEWAY_DEPLOYMENT = "ApiGatewayDeployment"
KIND_OBJECT_STORAGE_BUCKET = "ObjectStorageBucket"
KIND_OPENSEARCH_CLUSTER = "OpenSearchCluster"
KIND_QUEUE = "OciQueue"
KIND_DATAFLOW_APPLICATION = "DataFlowApplication"
KIND_NAT_GATEWAY = "OciNatGateway"

ALL_KINDS = (
    KIND_API_GATEWAY,
    KIND_API_GATEWAY_DEPLOYMENT,
    KIND_OBJECT_STORAGE_BUCKET,
    KIND_OPENSEARCH_CLUSTER,
    KIND_QUEUE,
    KIND_DATAFLOW_APPLICATION,
    KIND_NAT_GATEWAY,
)

# Labels
LABEL_MANAGED_BY = f"{API_GROUP}/managed-by"
LABEL_RESOURCE_KIND = f"{API_GROUP}/resource-kind"
LABEL_RESOURCE_NAME = f"{API_GROUP}/resource-name"

# Finalizers
FINALIZER = f"{API_GROUP}/finalizer"

# Field Manager
FIELD_MANAGER = "oci-service-operator"
CONTROLLER_NAME = "oci-service-operator"

# Condition Types
COND_PROVISIONING = "Provisioning"
COND_ACTIVE = "Active"
COND_UPDATING = "Updating"
COND_FAILED = "Failed"

CONDITION_TYPES = (COND_PROVISIONING, COND_ACTIVE, COND_UPDATING, COND_FAILED)

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_RESOURCE_CREATED = "ResourceCreated"
EVENT_REASON_RESOURCE_UPDATED = "ResourceUpdated"
EVENT_REASON_RESOURCE_ACTIVE = "ResourceActive"
EVENT_REASON_RESOURCE_DELETED = "ResourceDeleted"
EVENT_REASON_DELETE_FAILED = "DeleteFailed"

# Status keys
STATUS_REMOTE_ID = "remoteId"
STATUS_CONDITIONS = "conditions"
STATUS_CREATED_AT = "createdAt"
STATUS_WORK_REQUEST_ID = "workRequestId"

# Spec keys shared by every kind
SPEC_ID = "id"
SPEC_COMPARTMENT_ID = "compartmentId"
SPEC_DISPLAY_NAME = "displayName"
SPEC_FREEFORM_TAGS = "freeFormTags"
SPEC_DEFINED_TAGS = "definedTags"

# Composite identifiers
COMPOSITE_ID_SEPARATOR = "/"
