import clawcode
from clawcode import models
from clawcode.models.plan_models import AgentPlan as CoreAgentPlan


def test_public_model_exports():
    assert models.AgentPlan is CoreAgentPlan
    for name in models.__all__:
        assert hasattr(models, name)


def test_version_is_exposed():
    assert isinstance(clawcode.__version__, str)


def test_memory_models_accept_camel_case_keys():
    session = models.SessionMemory.model_validate(
        {"lastTasks": ["t"], "recentFiles": ["a.py"], "agentNotes": []}
    )
    assert session.last_tasks == ["t"]
    assert session.model_dump(by_alias=True) == {
        "lastTasks": ["t"],
        "recentFiles": ["a.py"],
        "agentNotes": [],
    }
