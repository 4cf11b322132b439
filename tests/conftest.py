import pytest


@pytest.fixture
def moli_request_line():
    return (
        '{"level":"INFO","message":"Request","sampling_rate":0,"service":"HttpClientForDTE2",'
        '"timestamp":"2025-11-18T05:59:57.252Z","xray_trace_id":"1-691c0b5d-2f53e980022e584f779e04f4",'
        '"globalContext":{"clientId":"190sth074afcel3hm124hi2r7m","controller":"GetSubscriberHttpController"},'
        '"payload":{"method":"get","params":{"msisdn":"6070200618"},"url":"/mw/customer/v4/customer"}}'
    )


@pytest.fixture
def moli_response_line():
    return (
        '{"level":"INFO","message":"Response","sampling_rate":0,"service":"HttpClientForDTE2",'
        '"timestamp":"2025-11-18T05:59:57.685Z",'
        '"globalContext":{"clientId":"190sth074afcel3hm124hi2r7m","controller":"GetSubscriberHttpController"},'
        '"payload":{"status":200,"data":{"result":"success"}}}'
    )


@pytest.fixture
def noisy_log():
    return (
        "2025-11-18 05:59:57 INFO starting worker\n"
        'payload {"user": "alice", "roles": ["admin", "dev"]} accepted\n'
        "2025-11-18 05:59:58 WARN retrying } stray brace\n"
        'second {"id": 7, "tags": {"a": "{not a brace}"}} done\n'
    )


@pytest.fixture
def nested_data():
    return {
        "name": "svc",
        "count": 3,
        "ok": True,
        "missing": None,
        "items": [1, {"x": "y"}],
    }
