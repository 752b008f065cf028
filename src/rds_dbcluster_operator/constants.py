"""Constants for the RDS DBCluster Operator."""

# API Group
API_GROUP = "rds.cloud37.dev"
API_GROUP_VERSION = f"{API_GROUP}/v1alpha1"

# Resource Kinds
KIND_DB_CLUSTER = "DBCluster"

# Labels
LABEL_MANAGED_BY = f"{API_GROUP}/managed-by"

# Annotations
ANNOTATION_EXTERNAL_NAME = f"{API_GROUP}/external-name"

# Finalizers
FINALIZER = f"{API_GROUP}/finalizer"

# Field Manager
FIELD_MANAGER = "rds-dbcluster-operator"

# Deletion policies
DELETION_POLICY_DELETE = "Delete"
DELETION_POLICY_ORPHAN = "Orphan"

# Condition Types
COND_READY = "Ready"

# Condition Reasons
REASON_AVAILABLE = "Available"
REASON_UNAVAILABLE = "Unavailable"
REASON_CREATING = "Creating"
REASON_DELETING = "Deleting"

# Provider lifecycle statuses
STATUS_AVAILABLE = "available"
STATUS_MODIFYING = "modifying"
STATUS_DELETING = "deleting"
STATUS_STOPPED = "stopped"
STATUS_STOPPING = "stopping"
STATUS_CREATING = "creating"
STATUS_UPGRADING = "upgrading"
STATUS_CONFIGURING_IAM_AUTH = "configuring-iam-database-auth"

# Connection secret keys
CONNECTION_ENDPOINT_KEY = "endpoint"
CONNECTION_USERNAME_KEY = "username"
CONNECTION_PASSWORD_KEY = "password"

# Provider error codes
ERROR_CODE_CLUSTER_NOT_FOUND = "DBClusterNotFoundFault"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_CLUSTER_CREATED = "ClusterCreated"
EVENT_REASON_CLUSTER_UPDATED = "ClusterUpdated"
EVENT_REASON_CLUSTER_DELETED = "ClusterDeleted"
