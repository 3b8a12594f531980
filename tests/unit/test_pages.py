"""
Unit tests for recruit/pages/

Drives whole pages against the FakeBackend:
- Skills search with no matches shows the empty state
- Duplicate qualification keeps the form open with the page message
- A 401 anywhere logs out and redirects without a toast
- Delete, status actions and detail-view action forms
- Registry coverage and role gating
"""

import pytest

from recruit.api.models import CurrentUser
from recruit.controllers.list_controller import ListState
from recruit.controllers.notifications import ToastKind
from recruit.pages import PAGES, build_page, get_page_config


def skills_body(items, total=None):
    return {"skills": items, "pagination": {"totalCount": len(items) if total is None else total}}


@pytest.fixture
def admin():
    return CurrentUser(id="u-1", email="admin@example.com", role="Admin")


def messages_of(page):
    return [t.message for t in page.notifier.active()]


# ===== Skills =====

class TestSkillsPage:
    """Search and empty state on the skills page."""

    def test_search_without_matches_shows_empty_state(
        self, api, backend, admin, settings, sample_skills, make_response
    ):
        # Arrange
        def serve(call):
            if (call.get("params") or {}).get("search") == "React":
                return make_response(200, skills_body([], total=0))
            return make_response(200, skills_body(sample_skills))

        backend.add("GET", "skills", serve)
        page = build_page("skills", api, admin, settings=settings)
        page.open()

        # Act
        page.list.apply_filters(search="React")

        # Assert
        assert page.list.state == ListState.LOADED
        assert page.list.is_empty
        assert page.list.empty_text == "No skills found"
        assert not page.list.show_pagination
        assert backend.calls_to("GET", "skills")[-1]["params"] == {"page": 1, "pageSize": 10, "search": "React"}

    def test_initial_load_renders_rows(self, api, backend, admin, settings, sample_skills, make_response):
        backend.add("GET", "skills", make_response(200, skills_body(sample_skills, total=3)))
        page = build_page("skills", api, admin, settings=settings)

        assert page.open() is True

        assert page.rows() == [
            {"id": "s-1", "skillName": "Python"},
            {"id": "s-2", "skillName": "React"},
            {"id": "s-3", "skillName": "SQL"},
        ]

    def test_create_refreshes_list(self, api, backend, admin, settings, make_response):
        backend.add("GET", "skills", [
            make_response(200, skills_body([])),
            make_response(200, skills_body([{"id": "s-9", "skillName": "Go"}])),
        ])
        backend.add("POST", "skills", make_response(201, {"id": "s-9", "skillName": "Go"}))
        page = build_page("skills", api, admin, settings=settings)
        page.open()

        page.form.open()
        page.form.draft.set(skillName="Go")
        assert page.form.submit() is True

        assert backend.calls_to("POST", "skills")[0]["json"] == {"skillName": "Go"}
        assert page.list.items == [{"id": "s-9", "skillName": "Go"}]
        assert messages_of(page) == ["Skill created successfully"]

    def test_edit_shows_updated_record(self, api, backend, admin, settings, make_response, sample_skills):
        # Arrange
        renamed = [dict(sample_skills[0], skillName="Python 3")] + sample_skills[1:]
        backend.add("GET", "skills", [
            make_response(200, skills_body(sample_skills)),
            make_response(200, skills_body(renamed)),
        ])
        backend.add("PUT", "skills/s-1", make_response(200, renamed[0]))
        page = build_page("skills", api, admin, settings=settings)
        page.open()

        # Act
        page.form.open(page.list.items[0])
        page.form.draft.set(skillName="  Python 3 ")
        saved = page.form.submit()

        # Assert
        assert saved is True
        assert backend.calls_to("PUT", "skills/s-1")[0]["json"]["skillName"] == "Python 3"
        assert page.list.items[0] == {"id": "s-1", "skillName": "Python 3"}
        assert "Python" not in [s["skillName"] for s in page.list.items]
        assert len(backend.calls_to("GET", "skills")) == 2
        assert messages_of(page) == ["Skill updated successfully"]
        assert not page.form.is_open

    def test_delete_in_use_shows_page_message(self, api, backend, admin, settings, make_response, sample_skills):
        backend.add("GET", "skills", make_response(200, skills_body(sample_skills)))
        backend.add("DELETE", "skills/s-1", make_response(400, {"message": "Skill is in use by 3 candidates"}))
        page = build_page("skills", api, admin, settings=settings)
        page.open()

        deleted = page.delete("s-1")

        assert deleted is False
        assert messages_of(page) == ["This skill is in use and cannot be deleted"]
        assert page.errors.last.operation == "delete"
        assert len(page.list.items) == 3

    def test_delete_success_refreshes(self, api, backend, admin, settings, make_response, sample_skills):
        backend.add("GET", "skills", [
            make_response(200, skills_body(sample_skills)),
            make_response(200, skills_body(sample_skills[1:])),
        ])
        backend.add("DELETE", "skills/s-1", make_response(204))
        page = build_page("skills", api, admin, settings=settings)
        page.open()

        assert page.delete("s-1") is True

        assert [s["id"] for s in page.list.items] == ["s-2", "s-3"]
        assert messages_of(page) == ["Skill deleted successfully"]


# ===== Qualifications =====

class TestQualificationsPage:

    def test_duplicate_keeps_form_open(self, api, backend, admin, settings, make_response):
        # Arrange
        backend.add("GET", "qualification", make_response(200, [{"id": "q-1", "qualificationName": "MBA"}]))
        backend.add(
            "POST",
            "qualification",
            make_response(400, {"message": "Qualification 'MBA' already exists"}),
        )
        page = build_page("qualifications", api, admin, settings=settings)
        page.open()
        page.form.open()
        page.form.draft.set(qualificationName="MBA")

        # Act
        saved = page.form.submit()

        # Assert
        assert saved is False
        assert page.form.is_open
        assert page.form.draft.values == {"qualificationName": "MBA"}
        toasts = page.notifier.active()
        assert [t.message for t in toasts] == ["This qualification already exists"]
        assert toasts[0].kind == ToastKind.ERROR
        assert len(backend.calls_to("GET", "qualification")) == 1

    def test_edit_shows_updated_record(self, api, backend, admin, settings, make_response):
        backend.add("GET", "qualification", [
            make_response(200, [{"id": "q-1", "qualificationName": "MBA"}]),
            make_response(200, [{"id": "q-1", "qualificationName": "MBA (Finance)"}]),
        ])
        backend.add("PUT", "qualification/q-1", make_response(204))
        page = build_page("qualifications", api, admin, settings=settings)
        page.open()

        page.form.open(page.list.items[0])
        page.form.draft.set(qualificationName="MBA (Finance)")
        assert page.form.submit() is True

        assert page.list.items == [{"id": "q-1", "qualificationName": "MBA (Finance)"}]
        assert page.rows() == [{"id": "q-1", "qualificationName": "MBA (Finance)"}]

    def test_empty_name_not_sent(self, api, backend, admin, settings):
        page = build_page("qualifications", api, admin, settings=settings)
        page.form.open()
        page.form.draft.set(qualificationName="   ")

        assert page.form.submit() is False

        assert messages_of(page) == ["Please enter a qualification name"]
        assert backend.calls_to("POST", "qualification") == []


# ===== Global 401 =====

class TestUnauthorized:
    """A 401 from any page clears the session and redirects."""

    def test_list_load_401(self, api, backend, session, navigator, admin, settings, make_response):
        backend.add("GET", "skills", make_response(401, {"message": "Token expired"}))
        page = build_page("skills", api, admin, settings=settings)

        assert page.open() is False

        assert session.token is None
        assert navigator.location == "/login"
        assert page.notifier.active() == []
        assert page.list.state == ListState.ERROR

    def test_save_401(self, api, backend, session, navigator, admin, settings, make_response):
        backend.add("POST", "skills", make_response(401))
        page = build_page("skills", api, admin, settings=settings)
        page.form.open()
        page.form.draft.set(skillName="Go")

        assert page.form.submit() is False

        assert navigator.location == "/login"
        assert not session.is_authenticated
        assert page.notifier.active() == []


# ===== Jobs =====

class TestJobsPage:
    """Lookups, label rendering and status actions."""

    @pytest.fixture
    def jobs_backend(self, backend, make_response, sample_statuses, sample_skills):
        backend.add("GET", "lookups/statuses", make_response(200, sample_statuses))
        backend.add("GET", "jobtype", make_response(200, [{"id": "jt-1", "type": "Full-time"}]))
        backend.add("GET", "skills", make_response(200, skills_body(sample_skills)))
        backend.add("GET", "jobs", make_response(200, {
            "jobs": [{"id": "j-1", "title": "Backend Developer", "jobTypeId": "jt-1", "statusId": "st-open"}],
            "pagination": {"totalCount": 1},
        }))
        return backend

    def test_rows_use_lookup_labels(self, api, jobs_backend, admin, settings):
        page = build_page("jobs", api, admin, settings=settings)

        page.open()

        assert page.rows() == [{
            "id": "j-1",
            "title": "Backend Developer",
            "jobTypeId": "Full-time",
            "statusId": "Open",
        }]

    def test_filters_sent_to_backend(self, api, jobs_backend, admin, settings):
        page = build_page("jobs", api, admin, settings=settings)
        page.open()

        page.list.apply_filters(statusId="st-open", jobTypeId="jt-1")

        assert jobs_backend.calls_to("GET", "jobs")[-1]["params"] == {
            "page": 1,
            "pageSize": 10,
            "statusId": "st-open",
            "jobTypeId": "jt-1",
        }

    def test_close_action(self, api, jobs_backend, admin, settings, make_response):
        jobs_backend.add("POST", "jobs/j-1/close", make_response(200, {"id": "j-1"}))
        page = build_page("jobs", api, admin, settings=settings)

        assert page.run_action("close", "j-1") is True

        assert messages_of(page) == ["Job closed successfully"]
        assert len(jobs_backend.calls_to("GET", "jobs")) == 1

    def test_failed_action(self, api, jobs_backend, admin, settings, make_response):
        jobs_backend.add("POST", "jobs/j-1/close", make_response(500, "boom"))
        page = build_page("jobs", api, admin, settings=settings)

        assert page.run_action("close", "j-1") is False

        assert messages_of(page) == ["Failed to close job"]
        assert page.errors.last.operation == "close"

    def test_unknown_action(self, api, admin, settings):
        page = build_page("jobs", api, admin, settings=settings)

        with pytest.raises(ValueError, match="no action 'publish'"):
            page.run_action("publish", "j-1")


# ===== Offer letters =====

class TestOfferLettersPage:

    def test_generate_pdf_from_detail(self, api, backend, admin, settings, make_response):
        # Arrange
        offer = {"id": "o-1", "candidateName": "Asha Rao", "jobTitle": "Analyst", "status": "Draft"}
        backend.add("GET", "v1/offerletter", make_response(200, [offer]))
        backend.add("POST", "v1/offerletter/generate", make_response(200, {"pdfUrl": "/files/o-1.pdf"}))
        page = build_page("offer_letters", api, admin, settings=settings)
        page.detail.open(offer)

        # Act
        draft = page.detail.run("generate_pdf")
        draft.set(
            companyName="Acme",
            companyAddress="1 Main St",
            signatoryName="R. Iyer",
            signatoryDesignation="HR Head",
        )
        saved = page.action_forms["generate_pdf"].submit()

        # Assert
        assert saved is True
        assert backend.calls_to("POST", "v1/offerletter/generate")[0]["json"] == {
            "offerLetterId": "o-1",
            "companyName": "Acme",
            "companyAddress": "1 Main St",
            "signatoryName": "R. Iyer",
            "signatoryDesignation": "HR Head",
        }
        assert messages_of(page) == ["Offer letter PDF generated successfully"]
        assert page.list.items == [offer]

    def test_generate_pdf_requires_company_details(self, api, backend, admin, settings):
        page = build_page("offer_letters", api, admin, settings=settings)
        page.detail.open({"id": "o-1"})

        page.detail.run("generate_pdf")
        assert page.action_forms["generate_pdf"].submit() is False

        assert backend.calls_to("POST", "v1/offerletter/generate") == []

    def test_send_action(self, api, backend, admin, settings, make_response):
        backend.add("GET", "v1/offerletter", make_response(200, []))
        backend.add("POST", "v1/offerletter/send", make_response(200))
        page = build_page("offer_letters", api, admin, settings=settings)

        assert page.run_action("send", "o-1") is True

        assert backend.calls_to("POST", "v1/offerletter/send")[0]["json"] == {"offerLetterId": "o-1"}

    def test_local_search(self, api, backend, admin, settings, make_response):
        backend.add("GET", "v1/offerletter", make_response(200, [
            {"id": "o-1", "candidateName": "Asha Rao", "jobTitle": "Analyst"},
            {"id": "o-2", "candidateName": "Ben Ade", "jobTitle": "Designer"},
        ]))
        page = build_page("offer_letters", api, admin, settings=settings)

        page.list.apply_filters(search="design")

        assert [o["id"] for o in page.list.items] == ["o-2"]
        assert page.list.pagination.total_count == 1


# ===== Registry and roles =====

class TestRegistry:

    def test_all_pages_registered(self):
        assert set(PAGES) == {
            "skills", "qualifications", "job_types", "users", "candidates",
            "positions", "jobs", "applications", "interviews", "offer_letters",
            "documents", "verifications", "events", "email_templates",
        }

    def test_unknown_page(self):
        with pytest.raises(KeyError):
            get_page_config("payroll")

    @pytest.mark.parametrize("key", sorted(PAGES))
    def test_config_matches_client(self, api, key):
        """Every configured resource and action method exists on the API."""
        config = get_page_config(key)
        resource = getattr(api, config.resource)

        for action in config.status_actions:
            assert callable(getattr(resource, action.method))
        for action_form in config.action_forms:
            assert callable(getattr(resource, action_form.method))
        for field_name in config.required:
            assert field_name in config.form_defaults

    @pytest.mark.parametrize("key,role,expected", [
        ("qualifications", "Admin", True),
        ("qualifications", "HR", False),
        ("skills", "HR", True),
        ("jobs", "Recruiter", True),
        ("jobs", "Candidate", False),
        ("interviews", "Interviewer", True),
        ("users", "Recruiter", False),
    ])
    def test_can_manage(self, api, settings, key, role, expected):
        page = build_page(key, api, CurrentUser(role=role), settings=settings)

        assert page.can_manage is expected

    def test_anonymous_user_manages_nothing(self, api, settings):
        assert build_page("skills", api, settings=settings).can_manage is False
