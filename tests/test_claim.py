from tests.fakes import FakeResponse


CLAIM_URL = "https://api.nexyai.io/client/user-tasks/claim/task-000001"


async def test_claim_succeeds_on_status_code_200(nexyai, session, sleep):
    session.add("POST", CLAIM_URL, FakeResponse(200, {"statusCode": 200, "data": {}}))

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL")

    assert outcome.success
    assert outcome.message == 'Task "Follow" claimed'
    assert session.count("POST", CLAIM_URL) == 1


async def test_claim_succeeds_on_success_flag(nexyai, session, sleep):
    session.add("POST", CLAIM_URL, FakeResponse(201, {"data": {"success": True}}))

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL")

    assert outcome.success


async def test_claim_treats_already_claimed_as_success(nexyai, session, sleep):
    session.add(
        "POST",
        CLAIM_URL,
        FakeResponse(400, {"statusCode": 400, "message": "Task already claimed"}),
    )

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL", max_retries=1)

    assert outcome.success
    assert outcome.message == 'Task "Follow" already claimed'


async def test_claim_fails_on_other_client_errors(nexyai, session, sleep):
    session.add("POST", CLAIM_URL, FakeResponse(400, {"message": "Task not verified"}))

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL")

    assert not outcome.success
    assert outcome.message.startswith("Failed to claim:")
    assert "Task not verified" in outcome.message


async def test_claim_does_not_treat_other_statuses_as_already_claimed(nexyai, session, sleep):
    session.add("POST", CLAIM_URL, FakeResponse(409, {"message": "already claimed"}))

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL")

    assert not outcome.success


async def test_claim_retries_invalid_response(nexyai, session, sleep):
    session.add("POST", CLAIM_URL, FakeResponse(200, {"data": {"success": False}}))

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL", max_retries=5)

    assert not outcome.success
    assert outcome.message == "Failed to claim: Invalid response"
    assert session.count("POST", CLAIM_URL) == 5
    assert sleep.delays == [5] * 4


async def test_claim_recovers_on_later_retry(nexyai, session, sleep):
    session.add(
        "POST",
        CLAIM_URL,
        FakeResponse(200, {"data": {}}),
        FakeResponse(200, {"statusCode": 200}),
    )

    outcome = await nexyai.claimer.claim("task-000001", "Follow", "SOCIAL", max_retries=3)

    assert outcome.success
    assert sleep.delays == [5]
