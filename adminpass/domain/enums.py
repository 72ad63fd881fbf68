"""Domain enumerations: user roles, override actions, generation events."""

from enum import Enum


class UserRole(str, Enum):
    """Role of a staff member. Only ADMIN may manage admin passwords."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    TAX = "tax"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]


class AdminPasswordAction(str, Enum):
    """Sensitive operations that require the admin password.

    The usage log accepts free-form action names; these are the ones the
    billing screens send.
    """

    DELETE_JOB = "delete_job"
    DELETE_BILL = "delete_bill"
    DELETE_PAYMENT = "delete_payment"
    APPROVE_PAYMENT = "approve_payment"
    COMPLETE_PAYMENT = "complete_payment"
    FINALIZE_BILL = "finalize_bill"
    RESTORE_ITEM = "restore_item"
    MODIFY_BANK_ACCOUNT = "modify_bank_account"
    OVERRIDE_APPROVAL = "override_approval"
    MODIFY_USER_ROLE = "modify_user_role"


class PasswordEventType(str, Enum):
    """Entries in the generation event log."""

    GENERATED = "password_generated"
    ROTATED = "password_rotated"


class GenerationMethod(str, Enum):
    """What triggered a generation: an admin request, the cron hook, or a script."""

    API = "api"
    CRON = "cron"
    SCRIPT = "script"
