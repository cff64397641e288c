"""Constants for the Lattice Auth Operator."""

# API Group
API_GROUP = "application-networking.k8s.aws"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_IAM_AUTH_POLICY = "IAMAuthPolicy"
PLURAL_IAM_AUTH_POLICY = "iamauthpolicies"

# Target Kinds
TARGET_KIND_GATEWAY = "Gateway"
TARGET_KIND_HTTP_ROUTE = "HTTPRoute"
TARGET_KIND_GRPC_ROUTE = "GRPCRoute"

# Annotations
ANNOTATION_RESOURCE_ID = f"{API_GROUP}/resourceId"

# Finalizers
FINALIZER = "iamauthpolicy.k8s.aws/resources"

# Controller name used in structured logs
CONTROLLER_NAME = "lattice-auth-operator"

# Requeue delays (seconds)
DEPENDENCY_NOT_FOUND_REQUEUE_SECONDS = 30.0
UNSUPPORTED_TARGET_REQUEUE_SECONDS = 3600.0

# Lattice auth types
AUTH_TYPE_IAM = "AWS_IAM"
AUTH_TYPE_NONE = "NONE"

# Lattice resource types
RESOURCE_TYPE_SERVICE_NETWORK = "ServiceNetwork"
RESOURCE_TYPE_SERVICE = "Service"

# Lattice service naming
SERVICE_NAME_ROUTE_MAX_LENGTH = 20
SERVICE_NAME_NAMESPACE_MAX_LENGTH = 18

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_AUTH_POLICY_APPLIED = "AuthPolicyApplied"
EVENT_REASON_AUTH_POLICY_DELETED = "AuthPolicyDeleted"
EVENT_REASON_TARGET_NOT_FOUND = "TargetNotFound"
EVENT_REASON_UNSUPPORTED_TARGET = "UnsupportedTarget"
