"""
Closed role and feature enumerations.
Values are the wire strings stored in session data and permission files.
"""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    PLATFORM_ADMIN = "platform_admin"
    OWNER = "owner"
    ADMIN = "admin"
    ISSUER = "issuer"
    VERIFIER = "verifier"
    MEMBER = "member"
    HOLDER = "holder"


class Feature(str, Enum):
    SETTINGS = "settings"
    SEND_INVITATION = "send_invitations"
    CREATE_ORG = "create_org"
    CREATE_SCHEMA = "create_schema"
    ISSUANCE = "issuance"
    VERIFICATION = "verification"

    # Organization
    MANAGE_ORGANIZATION = "manage_organization"
    DELETE_ORGANIZATION = "delete_organization"
    ORGANIZATION_SETTINGS = "organization_settings"
    VIEW_WALLET_DETAILS = "view_wallet_details"

    # Users & roles
    MANAGE_MEMBERS = "manage_members"
    EDIT_USER_ROLES = "edit_user_roles"
    VIEW_USERS = "view_users"
    INVITE_USERS = "invite_users"

    # Schemas & credential definitions
    VIEW_SCHEMAS = "view_schemas"
    CREATE_CRED_DEF = "create_cred_def"
    MANAGE_SCHEMAS = "manage_schemas"
    SCHEMA_ENDORSEMENT = "schema_endorsement"

    # DIDs
    CREATE_DID = "create_did"
    MANAGE_DIDS = "manage_dids"
    SET_PRIMARY_DID = "set_primary_did"

    # Connections
    VIEW_CONNECTIONS = "view_connections"
    MANAGE_CONNECTIONS = "manage_connections"
    CREATE_CONNECTIONS = "create_connections"

    # Credentials
    MANAGE_CREDENTIALS = "manage_credentials"
    VIEW_ISSUED_CREDENTIALS = "view_issued_credentials"
    VIEW_PENDING_REQUESTS = "view_pending_requests"
    MANAGE_PENDING_REQUESTS = "manage_pending_requests"
    BULK_ISSUANCE = "bulk_issuance"
    EMAIL_ISSUANCE = "email_issuance"
    W3C_ISSUANCE = "w3c_issuance"
    DOWNLOAD_TEMPLATE = "download_template"
    VIEW_ISSUANCE_HISTORY = "view_issuance_history"
    RETRY_ISSUANCE = "retry_issuance"

    # Verification
    REQUEST_PROOF = "request_proof"
    EMAIL_VERIFICATION = "email_verification"
    W3C_VERIFICATION = "w3c_verification"
    VERIFY_CREDENTIALS = "verify_credentials"

    # Ecosystems
    ECOSYSTEM_MANAGEMENT = "ecosystem_management"
    VIEW_ECOSYSTEMS = "view_ecosystems"
    CREATE_ECOSYSTEM = "create_ecosystem"

    # Platform administration
    PLATFORM_MANAGEMENT = "platform_management"
    PLATFORM_SETTINGS = "platform_settings"
    VIEW_PLATFORM_ACTIVITY = "view_platform_activity"
    GENERATE_CLIENT_CREDENTIALS = "generate_client_credentials"

    # Dashboard & analytics
    VIEW_DASHBOARD = "view_dashboard"
    VIEW_ANALYTICS = "view_analytics"
    VIEW_ACTIVITY = "view_activity"

    # Profile
    MANAGE_PROFILE = "manage_profile"
    VIEW_PROFILE = "view_profile"
    ACCOUNT_SETTINGS = "account_settings"

    # API & integration
    API_ACCESS = "api_access"
    WEBHOOK_MANAGEMENT = "webhook_management"

    # Data
    EXPORT_DATA = "export_data"
    IMPORT_DATA = "import_data"

    # Organization registration & approval
    REGISTER_ORGANIZATION = "register_organization"
    APPROVE_ORGANIZATION = "approve_organization"

    PENDING_REQUESTS = "pending_requests"
    APPROVE_PENDING_REQUESTS = "approve_pending_requests"
    REJECT_PENDING_REQUESTS = "reject_pending_requests"
    VIEW_PENDING_REQUEST_DETAILS = "view_pending_request_details"


def to_role(value: object) -> Role | None:
    """Coerce a role name to Role. Anything outside the enum gives None."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def to_feature(value: object) -> Feature | None:
    if isinstance(value, Feature):
        return value
    try:
        return Feature(value)
    except ValueError:
        return None
