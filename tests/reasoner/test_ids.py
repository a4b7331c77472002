from backtracking.reasoner.ids import SequentialStepIds, uuid_step_id


def test_sequential_ids():
    ids = SequentialStepIds()
    assert [ids(), ids(), ids()] == ["step_1", "step_2", "step_3"]


def test_sequential_ids_custom_prefix_and_start():
    ids = SequentialStepIds(prefix="branch_a_", start=10)
    assert ids() == "branch_a_10"


def test_uuid_ids_are_unique_and_prefixed():
    generated = {uuid_step_id() for _ in range(100)}
    assert len(generated) == 100
    assert all(i.startswith("step_") and len(i) == len("step_") + 12 for i in generated)
