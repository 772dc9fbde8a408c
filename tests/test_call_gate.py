import json

import requests

from cloud_agent.application.call_gate import (
    CallGate,
    MISSING_KEY_MESSAGE,
    credential_variants,
    encode_segment,
    get_call_gate,
    invalid_arguments,
    missing_credential,
    reset_call_gate,
)
from cloud_agent.domain.models.call import (
    CallFailure,
    CallRequest,
    CallSuccess,
    EndpointConfig,
    FailureKind,
)
from cloud_agent.domain.services.projection import (
    prefer_field,
    prefer_text_field,
    pretty_json,
    project_task_result,
)


class RecordingTransport:
    def __init__(self, result):
        self.result = result
        self.sent = []

    def send(self, call):
        self.sent.append(call)
        return self.result


def _gate(result, credential='ca_secret_value'):
    transport = RecordingTransport(result)
    gate = CallGate(EndpointConfig('https://agent.example.com', credential), transport)
    return gate, transport


def test_missing_credential_touches_neither_route_nor_transport():
    gate, transport = _gate(CallSuccess({}), credential=None)
    built = []

    def build():
        built.append(True)
        return CallRequest.get('/api/usage')

    out = gate.invoke(build, pretty_json)
    assert out.is_error is True
    assert out.text == MISSING_KEY_MESSAGE
    assert out.text.startswith('Error: CLOUD_AGENT_API_KEY environment variable is required.')
    assert 'ca_* prefix' in out.text
    assert built == []
    assert transport.sent == []


def test_missing_credential_is_a_tagged_failure():
    failure = missing_credential()
    assert failure.kind is FailureKind.MISSING_CREDENTIAL
    gate, _ = _gate(CallSuccess({}), credential=None)
    assert gate.format_failure(failure).text == MISSING_KEY_MESSAGE


def test_empty_credential_counts_as_missing():
    gate, transport = _gate(CallSuccess({}), credential='')
    assert gate.invoke(lambda: CallRequest.get('/api/usage'), pretty_json).text == MISSING_KEY_MESSAGE
    assert transport.sent == []


def test_whitespace_credential_passes_through():
    gate, transport = _gate(CallFailure(FailureKind.HTTP_ERROR, 'Invalid API key'), credential='   ')
    out = gate.invoke(lambda: CallRequest.get('/api/usage'), pretty_json)
    assert len(transport.sent) == 1
    assert out.text == 'Error: Invalid API key'


def test_success_is_projected():
    gate, transport = _gate(CallSuccess({'answer': 'Use JWTs.'}))
    out = gate.invoke(
        lambda: CallRequest.post('/ask', {'question': 'auth?', 'repo': 'o/r'}),
        lambda payload: prefer_text_field(payload, 'answer'),
    )
    assert out.is_error is False
    assert out.text == 'Use JWTs.'
    assert transport.sent[0].path == '/ask'


def test_failure_rendered_as_error_line():
    gate, _ = _gate(CallFailure(FailureKind.TIMEOUT, 'Request timed out'))
    out = gate.invoke(lambda: CallRequest.get('/api/usage'), pretty_json)
    assert out.is_error is True
    assert out.text == 'Error: Request timed out'


def test_failure_never_echoes_credential():
    gate, _ = _gate(CallFailure(FailureKind.NETWORK_ERROR, 'rejected token ca_secret_value at edge'))
    out = gate.invoke(lambda: CallRequest.get('/api/usage'), pretty_json)
    assert 'ca_secret_value' not in out.text
    assert out.text == 'Error: rejected token *** at edge'


def test_failure_never_echoes_escaped_or_padded_credential():
    gate, _ = _gate(
        CallFailure(FailureKind.NETWORK_ERROR, "bad header value: 'Bearer ca_supersecret\\n'"),
        credential='ca_supersecret\n',
    )
    out = gate.invoke(lambda: CallRequest.get('/api/usage'), pretty_json)
    assert 'ca_supersecret' not in out.text
    assert out.text == "Error: bad header value: 'Bearer ***'"


def test_malformed_key_header_is_not_echoed(fake_net):
    fake_net.error = requests.exceptions.InvalidHeader(
        "Invalid leading whitespace, reserved character(s), or return character(s) "
        "in header value: 'Bearer ca_supersecret\\n'"
    )
    gate = CallGate(EndpointConfig('https://agent.example.com', 'ca_supersecret\n'))
    out = gate.invoke(lambda: CallRequest.get('/api/usage'), pretty_json)
    assert out.is_error is True
    assert out.text == 'Error: Invalid API key format'


def test_credential_variants():
    assert credential_variants(None) == []
    assert credential_variants('   ') == []
    assert credential_variants('ca_k') == ['ca_k']
    assert credential_variants(' ca_k\n') == [' ca_k\\n', ' ca_k\n', 'ca_k']


def test_local_argument_failure_skips_transport():
    gate, transport = _gate(CallSuccess({}))
    out = gate.invoke(lambda: invalid_arguments('Provide a target.'), pretty_json)
    assert out.text == 'Error: Provide a target.'
    assert transport.sent == []


def test_encode_segment_blocks_traversal():
    encoded = encode_segment('my playbook/v2')
    assert '/' not in encoded and ' ' not in encoded
    assert encoded == 'my%20playbook%2Fv2'
    assert encode_segment('../../admin') == '..%2F..%2Fadmin'
    assert encode_segment('a?b#c&d') == 'a%3Fb%23c%26d'


def test_shared_gate_follows_settings(configure):
    configure(api_key='ca_abc', url='https://agent.example.com/')
    gate = get_call_gate()
    assert gate is get_call_gate()
    assert gate.endpoint.base_url == 'https://agent.example.com'
    assert gate.endpoint.credential == 'ca_abc'
    replacement, _ = _gate(CallSuccess({}))
    assert reset_call_gate(replacement) is replacement
    assert get_call_gate() is replacement


def test_prefer_text_field_falls_back_to_json():
    assert prefer_text_field({'review': 'LGTM'}, 'review') == 'LGTM'
    assert prefer_text_field({'review': ''}, 'review') == json.dumps({'review': ''}, indent=2)
    assert prefer_text_field({'verdict': 'ok'}, 'review') == json.dumps({'verdict': 'ok'}, indent=2)
    assert prefer_text_field('raw text', 'review') == '"raw text"'


def test_prefer_field_uses_truthy_value():
    assert json.loads(prefer_field({'sessions': [{'id': 1}]}, 'sessions')) == [{'id': 1}]
    assert json.loads(prefer_field({'sessions': [], 'total': 0}, 'sessions')) == {'sessions': [], 'total': 0}


def test_task_projection_keeps_known_fields_and_null_pr_url():
    payload = {'response': 'done', 'cost_usd': 0.12, 'duration_ms': 3400, 'session_id': 'x'}
    assert json.loads(project_task_result(payload)) == {
        'response': 'done', 'cost_usd': 0.12, 'duration_ms': 3400, 'pr_url': None,
    }
    with_pr = dict(payload, pr_url='https://github.com/o/r/pull/7')
    assert json.loads(project_task_result(with_pr))['pr_url'] == 'https://github.com/o/r/pull/7'
    assert json.loads(project_task_result('plain')) == {'pr_url': None}


def test_pretty_json_keeps_unicode():
    assert pretty_json({'msg': 'héllo'}) == '{\n  "msg": "héllo"\n}'
