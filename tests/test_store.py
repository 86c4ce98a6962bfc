import pytest
from sqlalchemy import func, select

from tailorcv.db import Profile
from tailorcv.errors import ProfileNotFound, RecordNotFound
from tailorcv.model import Certification, EducationRecord, LanguageSkill, Skill, WorkExperience


@pytest.fixture
def ada(store):
    store.upsert_profile("u1", {"full_name": "Ada Lovelace", "email": "ada@example.org"})
    return store


def test_missing_profile_has_no_snapshot(store):
    assert store.get_snapshot("nobody") is None


def test_saving_twice_overwrites_the_single_row(store):
    store.upsert_profile("u1", {"full_name": "Ada Byron", "email": "ada@example.org"})
    snapshot = store.upsert_profile("u1", {"full_name": "Ada Lovelace", "email": "ada@example.org", "tone": "Formal"})
    assert snapshot.full_name == "Ada Lovelace"
    assert snapshot.tone == "Formal"

    with store._sessions() as session:
        count = session.execute(select(func.count()).select_from(Profile)).scalar_one()
    assert count == 1


def test_child_insert_requires_profile(store):
    with pytest.raises(ProfileNotFound):
        store.add_record("ghost", "skills", Skill("Python"))


def test_records_are_scoped_to_their_owner(ada):
    ada.upsert_profile("u2", {"full_name": "Charles Babbage", "email": "cb@example.org"})
    ada.add_record("u1", "skills", Skill("Mathematics"))
    ada.add_record("u2", "skills", Skill("Engineering"))
    assert [s.skill_name for s in ada.get_snapshot("u1").skills] == ["Mathematics"]
    assert [s.skill_name for s in ada.get_snapshot("u2").skills] == ["Engineering"]


def test_snapshot_collects_all_collections(ada):
    ada.add_record("u1", "work-experience", WorkExperience("Analyst", "Babbage & Co", "1842", responsibilities=["Note G"]))
    ada.add_record("u1", "education", EducationRecord("Private tutoring", "Home"))
    ada.add_record("u1", "certifications", Certification("Royal Society reader"))
    ada.add_record("u1", "languages", LanguageSkill("French", "Fluent"))

    snapshot = ada.get_snapshot("u1")
    assert snapshot.work_experience[0].responsibilities == ["Note G"]
    assert snapshot.work_experience[0].end_date == "Present"
    assert snapshot.education[0].institution == "Home"
    assert snapshot.certifications[0].certification_name == "Royal Society reader"
    assert snapshot.languages[0].proficiency_level == "Fluent"


def test_deleting_a_skill_leaves_siblings_and_other_collections(ada):
    keep = ada.add_record("u1", "skills", Skill("C++"))
    drop = ada.add_record("u1", "skills", Skill("Analytical Engines"))
    ada.add_record("u1", "languages", LanguageSkill("French"))
    ada.add_record("u1", "work-experience", WorkExperience("Analyst", "Babbage & Co", "1842"))
    before = ada.get_snapshot("u1")

    ada.delete_record("u1", "skills", drop.id)

    after = ada.get_snapshot("u1")
    assert [s.id for s in after.skills] == [keep.id]
    assert after.languages == before.languages
    assert after.work_experience == before.work_experience


def test_delete_is_owner_scoped(ada):
    ada.upsert_profile("u2", {"full_name": "Charles Babbage", "email": "cb@example.org"})
    skill = ada.add_record("u1", "skills", Skill("C++"))
    with pytest.raises(RecordNotFound):
        ada.delete_record("u2", "skills", skill.id)
    assert len(ada.get_snapshot("u1").skills) == 1


def test_records_come_back_in_insertion_order(ada):
    names = ["Zeta", "Alpha", "Mu", "Beta", "Omega"]
    for name in names:
        ada.add_record("u1", "skills", Skill(name))
    assert [s.skill_name for s in ada.get_snapshot("u1").skills] == names
