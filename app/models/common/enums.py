"""
Common enums for the HR access and leave service.
"""

from enum import Enum
from typing import Iterable, List


class UserStatus(str, Enum):
    """Account status; only active users may authenticate."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"

    def __str__(self) -> str:
        return self.value


class LeaveStatus(str, Enum):
    """Status of leave applications and monetization requests."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def final_statuses(cls) -> list["LeaveStatus"]:
        """Return statuses that represent finalized decisions."""
        return [cls.APPROVED, cls.REJECTED]


class Permission(str, Enum):
    """
    Closed set of capabilities granted to roles.

    Names are the wire/storage representation; anything outside this set
    is rejected at the boundary.
    """

    # Personnel
    EMPLOYEE_READ = "employee_read"
    EMPLOYEE_CREATE = "employee_create"
    EMPLOYEE_UPDATE = "employee_update"
    EMPLOYEE_DELETE = "employee_delete"
    EMPLOYMENT_HISTORY_READ = "employment_history_read"
    EMPLOYMENT_HISTORY_CREATE = "employment_history_create"
    MEMBERSHIP_DATA_READ = "membership_data_read"
    MEMBERSHIP_DATA_UPDATE = "membership_data_update"
    MERIT_READ = "merit_read"
    MERIT_CREATE = "merit_create"
    ADMIN_CASE_READ = "admin_case_read"
    ADMIN_CASE_CREATE = "admin_case_create"

    # Leave management
    LEAVE_REQUEST_READ = "leave_request_read"
    LEAVE_REQUEST_CREATE = "leave_request_create"
    LEAVE_REQUEST_UPDATE = "leave_request_update"
    LEAVE_REQUEST_DELETE = "leave_request_delete"
    LEAVE_TYPE_READ = "leave_type_read"
    LEAVE_TYPE_CREATE = "leave_type_create"
    LEAVE_TYPE_UPDATE = "leave_type_update"
    LEAVE_TYPE_DELETE = "leave_type_delete"
    LEAVE_BALANCE_READ = "leave_balance_read"
    LEAVE_BALANCE_CREATE = "leave_balance_create"
    LEAVE_REPORT_READ = "leave_report_read"

    # Attendance
    ATTENDANCE_LOG_READ = "attendance_log_read"
    ATTENDANCE_LOG_CREATE = "attendance_log_create"

    # Recruitment / job portal
    APPLICANT_READ = "applicant_read"
    APPLICANT_CREATE = "applicant_create"
    APPLICANT_UPDATE = "applicant_update"
    JOB_POSTING_READ = "job_posting_read"
    JOB_POSTING_CREATE = "job_posting_create"
    JOB_POSTING_UPDATE = "job_posting_update"
    APPLICATION_READ = "application_read"
    APPLICATION_CREATE = "application_create"
    APPLICATION_UPDATE = "application_update"
    RECRUITMENT_STATUS_READ = "recruitment_status_read"
    RECRUITMENT_STATUS_CREATE = "recruitment_status_create"
    RECRUITMENT_STATUS_UPDATE = "recruitment_status_update"
    INTERVIEW_SCHEDULE_READ = "interview_schedule_read"
    INTERVIEW_SCHEDULE_CREATE = "interview_schedule_create"
    INTERVIEW_SCHEDULE_UPDATE = "interview_schedule_update"

    # Payroll / performance
    PAYROLL_RECORD_READ = "payroll_record_read"
    PAYROLL_RECORD_CREATE = "payroll_record_create"
    PERFORMANCE_REVIEW_READ = "performance_review_read"
    PERFORMANCE_REVIEW_CREATE = "performance_review_create"

    # Reports
    REPORT_READ = "report_read"
    REPORT_GENERATE = "report_generate"

    # System administration
    USER_READ = "user_read"
    USER_CREATE = "user_create"
    USER_UPDATE = "user_update"
    USER_DELETE = "user_delete"
    ROLE_READ = "role_read"
    ROLE_CREATE = "role_create"
    ROLE_UPDATE = "role_update"
    ROLE_DELETE = "role_delete"
    PERMISSION_READ = "permission_read"
    PERMISSION_UPDATE = "permission_update"
    AUDIT_LOG_READ = "audit_log_read"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse_many(cls, names: Iterable[str]) -> List["Permission"]:
        """
        Convert external permission names to members, failing on the
        first unknown name.

        Raises:
            ValueError: if any name is not a member of the enumeration
        """
        parsed = []
        for name in names:
            try:
                parsed.append(cls(name))
            except ValueError:
                raise ValueError(f"Unknown permission: {name!r}") from None
        return parsed
