from concurrent.futures import ThreadPoolExecutor

import pytest

from outreach import history
from outreach.exceptions import PersistenceError


def make_record(company="Acme", **overrides):
    record = {
        "companyName": company,
        "website": None,
        "userIntent": "cold outreach",
        "summary": "Summary",
        "news": [],
        "techStack": ["React"],
        "pitchAngle": "Angle",
        "subjectLine": "Subject",
        "whatNotToPitch": "Nothing",
        "signalTag": "Tag",
        "jobSignals": [{"title": "Engineer", "company": company, "location": "Remote",
                        "type": "Full-time", "posted": "2024-05-01"}],
        "techStackDetail": [{"name": "React", "confidence": "detected", "source": "job postings"}],
        "keyInsights": ["one"],
        "confidenceNotes": "Notes",
        "companyLogo": "",
        "companyDomain": "",
    }
    record.update(overrides)
    return record


def test_save_brief_returns_stored_row(memory_db):
    brief = history.save_brief(make_record())
    assert brief.id
    assert brief.created_at.endswith("Z")
    assert brief.company_name == "Acme"
    assert brief.tech_stack == ["React"]
    assert brief.job_signals[0].title == "Engineer"
    assert brief.tech_stack_detail[0].confidence == "detected"


def test_every_save_inserts_a_new_row(memory_db):
    first = history.save_brief(make_record())
    second = history.save_brief(make_record())
    assert first.id != second.id
    assert memory_db.execute("SELECT COUNT(*) FROM briefs").fetchone()[0] == 2


def test_list_briefs_newest_first(memory_db):
    history.save_brief(make_record("First"))
    history.save_brief(make_record("Second"))
    assert [brief.company_name for brief in history.list_briefs()] == ["Second", "First"]


def test_save_brief_wraps_database_errors(memory_db):
    with pytest.raises(PersistenceError, match="NOT NULL"):
        history.save_brief(make_record(summary=None))


def test_closed_connection_raises_persistence_error(memory_db):
    memory_db.close()
    with pytest.raises(PersistenceError):
        history.save_brief(make_record())
    with pytest.raises(PersistenceError):
        history.list_briefs()


def test_failed_insert_does_not_undo_concurrent_inserts(memory_db):
    def save(i):
        try:
            return history.save_brief(make_record(f"Company {i}", summary=None if i % 2 else "Summary"))
        except PersistenceError:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        saved = [brief for brief in pool.map(save, range(40)) if brief]

    stored = {brief.id for brief in history.list_briefs()}
    assert len(saved) == 20
    assert {brief.id for brief in saved} == stored
