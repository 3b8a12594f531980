"""
Page registry: one PageConfig per managed resource.
"""

from typing import Dict

from ..controllers.notifications import EntityMessages
from ..controllers.role_gate import Roles
from .config import ActionForm, LookupConfig, PageConfig, StatusAction

ADMIN_ONLY = (Roles.ADMIN,)
ADMIN_HR = (Roles.ADMIN, Roles.HR)
HIRING_TEAM = (Roles.ADMIN, Roles.RECRUITER, Roles.HR)
INTERVIEW_TEAM = (Roles.ADMIN, Roles.RECRUITER, Roles.HR, Roles.INTERVIEWER)

STATUSES = LookupConfig("statuses", lambda api: api.lookups.statuses(), label_field="status")
JOB_TYPES = LookupConfig("job_types", lambda api: api.job_types.list_all(), label_field="type")
SKILLS = LookupConfig("skills", lambda api: api.skills.list_all(), label_field="skillName")
ROLES = LookupConfig("roles", lambda api: api.roles.list_all())
DOCUMENT_TYPES = LookupConfig("document_types", lambda api: api.document_types.list_all())
INTERVIEW_TYPES = LookupConfig("interview_types", lambda api: api.interviews.types())


PAGES: Dict[str, PageConfig] = {}


def register(config: PageConfig) -> PageConfig:
    PAGES[config.key] = config
    return config


def get_page_config(key: str) -> PageConfig:
    if key not in PAGES:
        raise KeyError(f"Unknown page '{key}'. Available: {', '.join(sorted(PAGES))}")
    return PAGES[key]


# ===== Catalog =====

register(PageConfig(
    key="skills",
    resource="skills",
    messages=EntityMessages(
        "skill",
        required={"skillName": "Please enter a skill name"},
        conflicts={
            "already exists": "This skill already exists",
            "in use": "This skill is in use and cannot be deleted",
        },
    ),
    manage_roles=ADMIN_HR,
    form_defaults={"skillName": ""},
    required=("skillName",),
    columns=("id", "skillName"),
    export="skills",
))

register(PageConfig(
    key="qualifications",
    resource="qualifications",
    messages=EntityMessages(
        "qualification",
        required={"qualificationName": "Please enter a qualification name"},
        conflicts={
            "already exists": "This qualification already exists",
            "in use": "This qualification is in use and cannot be deleted",
        },
    ),
    manage_roles=ADMIN_ONLY,
    form_defaults={"qualificationName": ""},
    required=("qualificationName",),
    columns=("id", "qualificationName"),
))

register(PageConfig(
    key="job_types",
    resource="job_types",
    messages=EntityMessages(
        "job type",
        required={"type": "Please enter a job type"},
        conflicts={
            "already exists": "This job type already exists",
            "in use": "This job type is in use and cannot be deleted",
        },
    ),
    manage_roles=ADMIN_ONLY,
    form_defaults={"type": ""},
    required=("type",),
    columns=("id", "type"),
))

# ===== People =====

register(PageConfig(
    key="users",
    resource="users",
    messages=EntityMessages(
        "user",
        required={"email": "Please enter an email address"},
        conflicts={"already exists": "A user with this email already exists"},
    ),
    manage_roles=ADMIN_ONLY,
    form_defaults={"email": "", "password": "", "userName": ""},
    required=("email",),
    columns=("id", "email", "userName", "roles"),
    lookups=(ROLES,),
    status_actions=(
        StatusAction("lock", "lock", "User locked successfully", "Failed to lock user"),
        StatusAction("unlock", "unlock", "User unlocked successfully", "Failed to unlock user"),
        StatusAction("restore", "restore", "User restored successfully", "Failed to restore user"),
        StatusAction("confirm_email", "confirm_email", "Email confirmed successfully", "Failed to confirm email"),
        StatusAction("update_roles", "update_roles", "User roles updated successfully", "Failed to update roles"),
    ),
))

register(PageConfig(
    key="candidates",
    resource="candidates",
    messages=EntityMessages(
        "candidate",
        conflicts={"already exists": "A candidate with this email already exists"},
    ),
    manage_roles=HIRING_TEAM,
    filter_defaults={"search": "", "skills": ""},
    form_defaults={
        "fullName": "",
        "email": "",
        "contactNumber": "",
        "password": "",
    },
    required=("fullName", "email"),
    columns=("id", "fullName", "email", "contactNumber"),
    lookups=(SKILLS,),
    export="candidates",
))

# ===== Hiring =====

register(PageConfig(
    key="positions",
    resource="positions",
    messages=EntityMessages("position"),
    manage_roles=HIRING_TEAM,
    filter_defaults={"search": "", "statusId": ""},
    form_defaults={"title": "", "numberOfInterviews": 1, "reviewerId": "", "skills": []},
    required=("title",),
    columns=("id", "title", "statusId", "numberOfInterviews"),
    lookups=(STATUSES, SKILLS),
    labels={"statusId": "statuses"},
    status_actions=(
        StatusAction("close", "close", "Position closed successfully", "Failed to close position"),
        StatusAction("hold", "hold", "Position put on hold successfully", "Failed to hold position"),
        StatusAction("reopen", "reopen", "Position reopened successfully", "Failed to reopen position"),
    ),
))

register(PageConfig(
    key="jobs",
    resource="jobs",
    messages=EntityMessages("job"),
    manage_roles=HIRING_TEAM,
    filter_defaults={"search": "", "statusId": "", "jobTypeId": ""},
    form_defaults={
        "title": "",
        "description": "",
        "positionId": "",
        "jobTypeId": "",
        "addressId": "",
        "salaryMin": "",
        "salaryMax": "",
        "requiredSkillIds": [],
        "preferredSkillIds": [],
    },
    required=("title", "description", "jobTypeId"),
    columns=("id", "title", "jobTypeId", "statusId"),
    lookups=(STATUSES, JOB_TYPES, SKILLS),
    labels={"statusId": "statuses", "jobTypeId": "job_types"},
    status_actions=(
        StatusAction("close", "close", "Job closed successfully", "Failed to close job"),
        StatusAction("hold", "hold", "Job put on hold successfully", "Failed to hold job"),
    ),
    export="jobs",
))

register(PageConfig(
    key="applications",
    resource="applications",
    messages=EntityMessages(
        "application",
        conflicts={"already exists": "This candidate has already applied for this job"},
    ),
    manage_roles=INTERVIEW_TEAM,
    filter_defaults={"search": "", "jobId": "", "candidateId": "", "statusId": ""},
    form_defaults={"jobId": "", "candidateId": ""},
    required=("jobId", "candidateId"),
    columns=("id", "candidateName", "jobTitle", "statusId"),
    lookups=(STATUSES,),
    labels={"statusId": "statuses"},
    status_actions=(
        StatusAction("update_status", "update_status", "Application updated successfully", "Failed to update application"),
        StatusAction("screen", "screen", "Application screened successfully", "Failed to screen application"),
    ),
    export="applications",
))

register(PageConfig(
    key="interviews",
    resource="interviews",
    messages=EntityMessages("interview"),
    manage_roles=INTERVIEW_TEAM,
    filter_defaults={"search": "", "statusId": ""},
    form_defaults={"jobApplicationId": "", "interviewTypeId": "", "roundNumber": 1, "interviewerIds": []},
    required=("jobApplicationId", "interviewTypeId"),
    columns=("id", "candidateName", "interviewTypeId", "roundNumber", "statusId"),
    lookups=(STATUSES, INTERVIEW_TYPES),
    labels={"statusId": "statuses", "interviewTypeId": "interview_types"},
    status_actions=(
        StatusAction("conduct", "conduct", "Interview conducted successfully", "Failed to conduct interview"),
    ),
    action_forms=(
        ActionForm(
            "schedule",
            "schedule_for",
            required=("scheduledAt",),
            defaults={"scheduledAt": "", "location": "", "meetingLink": ""},
            success="Interview scheduled successfully",
            failed="Failed to schedule interview",
        ),
        ActionForm(
            "feedback",
            "feedback_for",
            required=("forSkill", "rating"),
            defaults={"forSkill": "", "rating": 5, "feedback": ""},
            success="Feedback added successfully",
            failed="Failed to add feedback",
        ),
    ),
    export="interviews",
))

register(PageConfig(
    key="offer_letters",
    resource="offer_letters",
    messages=EntityMessages("offer letter"),
    manage_roles=HIRING_TEAM,
    filter_defaults={"search": "", "status": ""},
    form_defaults={
        "jobApplicationId": "",
        "joiningDate": "",
        "salary": "",
        "benefits": "",
        "additionalTerms": "",
        "expiryDate": "",
    },
    required=("jobApplicationId", "joiningDate", "salary"),
    columns=("id", "candidateName", "jobTitle", "salary", "status"),
    status_actions=(
        StatusAction("send", "send", "Offer letter sent successfully", "Failed to send offer letter"),
        StatusAction("accept", "accept", "Offer letter accepted successfully", "Failed to accept offer letter"),
        StatusAction("reject", "reject", "Offer letter rejected successfully", "Failed to reject offer letter"),
    ),
    action_forms=(
        ActionForm(
            "generate_pdf",
            "generate",
            required=("companyName", "companyAddress", "signatoryName", "signatoryDesignation"),
            defaults={
                "companyName": "",
                "companyAddress": "",
                "signatoryName": "",
                "signatoryDesignation": "",
            },
            success="Offer letter PDF generated successfully",
            failed="Failed to generate offer letter PDF",
        ),
    ),
))

# ===== Records =====

register(PageConfig(
    key="documents",
    resource="documents",
    messages=EntityMessages("document"),
    manage_roles=ADMIN_HR,
    form_defaults={"filePath": "", "candidateId": "", "documentTypeId": "", "description": ""},
    required=("filePath", "candidateId", "documentTypeId"),
    columns=("id", "fileName", "candidateName", "documentTypeId"),
    lookups=(DOCUMENT_TYPES,),
    labels={"documentTypeId": "document_types"},
))

register(PageConfig(
    key="verifications",
    resource="verifications",
    messages=EntityMessages("verification"),
    manage_roles=ADMIN_HR,
    form_defaults={
        "candidateId": "",
        "documentId": "",
        "statusId": "80000000-0000-0000-0000-000000000001",
        "comments": "",
    },
    required=("candidateId", "documentId"),
    columns=("id", "candidateName", "documentName", "statusId"),
    lookups=(STATUSES,),
    labels={"statusId": "statuses"},
))

register(PageConfig(
    key="events",
    resource="events",
    messages=EntityMessages("event"),
    manage_roles=ADMIN_HR,
    form_defaults={"name": "", "type": "Recruitment Drive", "location": "", "date": ""},
    required=("name", "date"),
    columns=("id", "name", "type", "location", "date"),
    status_actions=(
        StatusAction("register_candidate", "register_candidate", "Candidate registered for event", "Failed to register candidate"),
    ),
))

register(PageConfig(
    key="email_templates",
    resource="email_templates",
    messages=EntityMessages(
        "template",
        conflicts={"already exists": "A template with this name already exists"},
    ),
    manage_roles=ADMIN_HR,
    form_defaults={
        "name": "",
        "subject": "",
        "body": "",
        "description": "",
        "category": "General",
        "availableVariables": "",
        "isActive": True,
    },
    required=("name", "subject", "body"),
    columns=("id", "name", "subject", "category", "isActive"),
))
