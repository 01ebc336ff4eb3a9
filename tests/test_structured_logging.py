from mentalbase.core.structured_logging import build_log_context


def test_build_log_context_keeps_only_provided_ids():
    context = build_log_context(mentor_id="m1", client_id="c1", category=None, route="")

    assert context == {"mentor_id": "m1", "client_id": "c1"}


def test_build_log_context_empty():
    assert build_log_context() == {}
