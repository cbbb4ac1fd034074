import pytest

from farmtrack.contract import api, build_url, endpoints
from farmtrack.errors import ContractViolation, ValidationFailed


def test_build_url_substitutes_named_placeholders():
    assert build_url('/api/farms/:farmId/fields', {'farmId': 7}) == '/api/farms/7/fields'
    assert build_url(api.farms.get.path, {'id': 3}) == '/api/farms/3'


def test_build_url_leaves_unknown_placeholders():
    assert build_url('/api/farms/:id', {'other': 1}) == '/api/farms/:id'
    assert build_url('/api/farms/:id') == '/api/farms/:id'


def test_build_url_does_not_confuse_prefixed_names():
    assert build_url('/x/:id/:idx', {'id': 1, 'idx': 2}) == '/x/1/2'
    assert build_url('/x/:idx', {'id': 1}) == '/x/:idx'


def test_rule_renders_flask_converters():
    assert api.fields.list.rule == '/api/farms/<int:farmId>/fields'
    assert api.farms.list.rule == '/api/farms'
    assert api.crops.get.placeholders == ['id']


def test_every_endpoint_lives_under_api_and_declares_errors():
    for resource, name, endpoint in endpoints():
        assert endpoint.path.startswith('/api/'), (resource, name)
        assert 500 in endpoint.responses
        assert 429 in endpoint.responses, (resource, name)
        if endpoint.input is not None and endpoint.method != 'GET':
            assert 400 in endpoint.responses, (resource, name)


def test_parse_input_reports_first_failing_field():
    with pytest.raises(ValidationFailed) as exc:
        api.farms.create.parse_input({'name': 'A', 'location': 'B', 'size': -1})
    assert exc.value.field == 'size'
    assert exc.value.status_code == 400
    assert exc.value.message.startswith('size:')


def test_parse_input_missing_fields():
    with pytest.raises(ValidationFailed) as exc:
        api.farms.create.parse_input({})
    assert exc.value.field == 'name'


def test_parse_input_rejects_non_object_body():
    with pytest.raises(ValidationFailed):
        api.farms.create.parse_input(['not', 'an', 'object'])


def test_parse_input_accepts_camel_case_keys():
    data = api.farms.create.parse_input({'name': 'A', 'location': 'B', 'size': 2, 'sizeUnit': 'ha'})
    assert data.size_unit == 'ha'
    assert data.model_dump()['size_unit'] == 'ha'


def test_crop_status_is_closed_enumeration():
    with pytest.raises(ValidationFailed) as exc:
        api.crops.create.parse_input({'name': 'Rice', 'sowingDate': '2024-01-01T00:00:00Z', 'status': 'dormant'})
    assert exc.value.field == 'status'


def test_crop_yield_requires_harvested_status():
    with pytest.raises(ValidationFailed) as exc:
        api.crops.create.parse_input({
            'name': 'Rice', 'sowingDate': '2024-01-01T00:00:00Z', 'yieldAmount': 3.2,
        })
    assert 'harvested' in exc.value.message

    ok = api.crops.create.parse_input({
        'name': 'Rice', 'sowingDate': '2024-01-01T00:00:00Z',
        'status': 'harvested', 'yieldAmount': 3.2, 'yieldUnit': 't/ha',
    })
    assert ok.yield_amount == 3.2


def test_aware_datetimes_are_normalized_to_utc():
    data = api.crops.create.parse_input({'name': 'Rice', 'sowingDate': '2024-01-01T02:00:00+02:00'})
    assert data.sowing_date.tzinfo is None
    assert data.sowing_date.hour == 0


def test_activity_details_only_accepts_scalars():
    ok = api.activities.create.parse_input({
        'fieldId': 1, 'type': 'fertilization', 'date': '2024-05-01T00:00:00Z',
        'details': {'product': 'Urea', 'amount': 10, 'organic': False, 'lot': None},
    })
    assert ok.details == {'product': 'Urea', 'amount': 10, 'organic': False, 'lot': None}

    with pytest.raises(ValidationFailed) as exc:
        api.activities.create.parse_input({
            'fieldId': 1, 'type': 'fertilization', 'date': '2024-05-01T00:00:00Z',
            'details': {'mix': {'n': 10}},
        })
    assert exc.value.field.startswith('details')


def test_partial_update_rejects_null_for_required_columns():
    with pytest.raises(ValidationFailed):
        api.farms.update.parse_input({'name': None})
    assert api.farms.update.parse_input({'name': 'New'}).changes() == {'name': 'New'}
    assert api.crops.update.parse_input({'variety': None}).changes() == {'variety': None}


def test_parse_response_validates_declared_status():
    farm = {'id': 1, 'userId': 'u', 'name': 'F', 'location': 'L', 'size': 1.0, 'sizeUnit': 'acres'}
    parsed = api.farms.create.parse_response(201, farm)
    assert parsed.user_id == 'u'

    with pytest.raises(ContractViolation):
        api.farms.create.parse_response(200, farm)
    with pytest.raises(ContractViolation):
        api.farms.create.parse_response(201, {'id': 'not-a-number'})


def test_parse_response_empty_body_for_no_content():
    assert api.farms.delete.parse_response(204, None) is None
    with pytest.raises(ContractViolation):
        api.farms.delete.parse_response(204, {'unexpected': True})


def test_parse_response_error_schema():
    err = api.farms.get.parse_response(404, {'message': 'Farm not found'})
    assert err.message == 'Farm not found'
