"""Static role -> permission table used for route gating."""
from __future__ import annotations

from enum import Enum

from .enums import Role


class Permission(str, Enum):
    VIEW_ALL_SUBMISSIONS = "view_all_submissions"
    MANAGE_USERS = "manage_users"
    MANAGE_SITES = "manage_sites"
    VIEW_ENTITY_MANAGEMENT = "view_entity_management"
    VIEW_DEVELOPER_SETTINGS = "view_developer_settings"
    VIEW_OPERATIONS_DASHBOARD = "view_operations_dashboard"
    VIEW_SITE_DASHBOARD = "view_site_dashboard"
    CREATE_ENROLLMENT = "create_enrollment"
    MANAGE_ROLES_AND_PERMISSIONS = "manage_roles_and_permissions"
    MANAGE_ATTENDANCE_RULES = "manage_attendance_rules"
    VIEW_OWN_ATTENDANCE = "view_own_attendance"
    VIEW_ALL_ATTENDANCE = "view_all_attendance"
    DOWNLOAD_ATTENDANCE_REPORT = "download_attendance_report"
    APPLY_FOR_LEAVE = "apply_for_leave"
    MANAGE_LEAVE_REQUESTS = "manage_leave_requests"
    MANAGE_APPROVAL_WORKFLOW = "manage_approval_workflow"
    MANAGE_TASKS = "manage_tasks"
    MANAGE_POLICIES = "manage_policies"
    MANAGE_INSURANCE = "manage_insurance"
    MANAGE_ENROLLMENT_RULES = "manage_enrollment_rules"
    MANAGE_UNIFORMS = "manage_uniforms"
    VIEW_INVOICE_SUMMARY = "view_invoice_summary"
    VIEW_VERIFICATION_COSTING = "view_verification_costing"
    VIEW_FIELD_OFFICER_TRACKING = "view_field_officer_tracking"
    MANAGE_MODULES = "manage_modules"
    ACCESS_SUPPORT_DESK = "access_support_desk"


P = Permission

_EMPLOYEE_BASICS = {P.VIEW_OWN_ATTENDANCE, P.APPLY_FOR_LEAVE, P.ACCESS_SUPPORT_DESK}

DEFAULT_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.HR: frozenset(
        _EMPLOYEE_BASICS
        | {
            P.VIEW_ALL_SUBMISSIONS,
            P.MANAGE_USERS,
            P.MANAGE_SITES,
            P.VIEW_ENTITY_MANAGEMENT,
            P.CREATE_ENROLLMENT,
            P.MANAGE_ATTENDANCE_RULES,
            P.VIEW_ALL_ATTENDANCE,
            P.DOWNLOAD_ATTENDANCE_REPORT,
            P.MANAGE_LEAVE_REQUESTS,
            P.MANAGE_APPROVAL_WORKFLOW,
            P.MANAGE_TASKS,
            P.MANAGE_POLICIES,
            P.MANAGE_INSURANCE,
            P.MANAGE_ENROLLMENT_RULES,
            P.MANAGE_UNIFORMS,
            P.VIEW_INVOICE_SUMMARY,
            P.VIEW_VERIFICATION_COSTING,
            P.VIEW_FIELD_OFFICER_TRACKING,
        }
    ),
    Role.DEVELOPER: frozenset(_EMPLOYEE_BASICS | {P.VIEW_DEVELOPER_SETTINGS, P.MANAGE_MODULES}),
    Role.OPERATION_MANAGER: frozenset(
        _EMPLOYEE_BASICS
        | {
            P.VIEW_OPERATIONS_DASHBOARD,
            P.VIEW_ALL_SUBMISSIONS,
            P.VIEW_ALL_ATTENDANCE,
            P.DOWNLOAD_ATTENDANCE_REPORT,
            P.MANAGE_LEAVE_REQUESTS,
            P.MANAGE_TASKS,
            P.VIEW_FIELD_OFFICER_TRACKING,
            P.VIEW_INVOICE_SUMMARY,
        }
    ),
    Role.SITE_MANAGER: frozenset(
        _EMPLOYEE_BASICS | {P.VIEW_SITE_DASHBOARD, P.CREATE_ENROLLMENT, P.MANAGE_LEAVE_REQUESTS, P.MANAGE_UNIFORMS}
    ),
    Role.FIELD_OFFICER: frozenset(_EMPLOYEE_BASICS | {P.CREATE_ENROLLMENT}),
    Role.UNVERIFIED: frozenset(),
}
