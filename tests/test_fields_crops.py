def test_create_and_list_fields(alice, farm):
    created = alice.post(f"/api/farms/{farm['id']}/fields", json={
        'name': 'West Block', 'area': 8, 'soilType': 'Black cotton',
    })
    assert created.status_code == 201
    field = created.get_json()
    assert field['farmId'] == farm['id']
    assert field['soilType'] == 'Black cotton'

    listed = alice.get(f"/api/farms/{farm['id']}/fields").get_json()
    assert [f['id'] for f in listed] == [field['id']]


def test_field_body_cannot_choose_its_farm(alice, bob, farm):
    bob_farm = bob.post('/api/farms', json={'name': 'B', 'location': 'L', 'size': 1}).get_json()
    resp = alice.post(f"/api/farms/{farm['id']}/fields", json={
        'name': 'Sneaky', 'area': 1, 'soilType': 'Sand', 'farmId': bob_farm['id'],
    })
    assert resp.get_json()['farmId'] == farm['id']


def test_fields_of_foreign_farm_are_unauthorized(bob, farm):
    assert bob.get(f"/api/farms/{farm['id']}/fields").status_code == 401
    resp = bob.post(f"/api/farms/{farm['id']}/fields", json={'name': 'x', 'area': 1, 'soilType': 'Loam'})
    assert resp.status_code == 401


def test_fields_of_missing_farm_are_not_found(alice):
    assert alice.get('/api/farms/777/fields').status_code == 404
    resp = alice.post('/api/farms/777/fields', json={'name': 'x', 'area': 1, 'soilType': 'Loam'})
    assert resp.status_code == 404


def test_field_area_must_be_positive(alice, farm):
    resp = alice.post(f"/api/farms/{farm['id']}/fields", json={'name': 'Zero', 'area': 0, 'soilType': 'Loam'})
    assert resp.status_code == 400
    assert resp.get_json()['field'] == 'area'


def test_get_update_delete_field(alice, bob, field):
    assert alice.get(f"/api/fields/{field['id']}").get_json() == field
    assert bob.get(f"/api/fields/{field['id']}").status_code == 401
    assert alice.get('/api/fields/9999').status_code == 404

    updated = alice.put(f"/api/fields/{field['id']}", json={'area': 14})
    assert updated.status_code == 200
    assert updated.get_json()['area'] == 14
    assert updated.get_json()['name'] == field['name']

    assert bob.delete(f"/api/fields/{field['id']}").status_code == 401
    assert alice.delete(f"/api/fields/{field['id']}").status_code == 204
    assert alice.get(f"/api/fields/{field['id']}").status_code == 404


def test_create_crop_round_trips(alice, field, crop):
    assert crop['fieldId'] == field['id']
    assert crop['status'] == 'active'
    assert crop['sowingDate'] == '2024-06-20T00:00:00Z'
    assert crop['expectedHarvestDate'] is None
    assert crop['yieldAmount'] is None

    assert alice.get(f"/api/crops/{crop['id']}").get_json() == crop
    assert alice.get(f"/api/fields/{field['id']}/crops").get_json() == [crop]


def test_crop_dates_with_offsets_are_stored_in_utc(alice, field):
    resp = alice.post(f"/api/fields/{field['id']}/crops", json={
        'name': 'Maize', 'sowingDate': '2024-03-01T05:30:00+05:30',
        'expectedHarvestDate': '2024-07-01T00:00:00Z',
    })
    assert resp.status_code == 201
    assert resp.get_json()['sowingDate'] == '2024-03-01T00:00:00Z'


def test_crop_requires_sowing_date_and_known_status(alice, field):
    missing = alice.post(f"/api/fields/{field['id']}/crops", json={'name': 'Maize'})
    assert missing.status_code == 400
    assert missing.get_json()['field'] == 'sowingDate'

    unknown = alice.post(f"/api/fields/{field['id']}/crops", json={
        'name': 'Maize', 'sowingDate': '2024-03-01T00:00:00Z', 'status': 'sleeping',
    })
    assert unknown.status_code == 400
    assert unknown.get_json()['field'] == 'status'


def test_crops_of_foreign_or_missing_field(alice, bob, field):
    assert bob.get(f"/api/fields/{field['id']}/crops").status_code == 401
    resp = bob.post(f"/api/fields/{field['id']}/crops", json={'name': 'x', 'sowingDate': '2024-01-01T00:00:00Z'})
    assert resp.status_code == 401
    assert alice.get('/api/fields/5555/crops').status_code == 404


def test_record_harvest_on_crop(alice, bob, crop):
    harvest = alice.put(f"/api/crops/{crop['id']}", json={
        'status': 'harvested', 'actualHarvestDate': '2024-10-15T00:00:00Z',
        'yieldAmount': 5.1, 'yieldUnit': 't/ha',
    })
    assert harvest.status_code == 200
    body = harvest.get_json()
    assert body['status'] == 'harvested'
    assert body['yieldAmount'] == 5.1
    assert body['actualHarvestDate'] == '2024-10-15T00:00:00Z'
    assert body['name'] == crop['name']

    assert bob.put(f"/api/crops/{crop['id']}", json={'name': 'Mine'}).status_code == 401
    assert bob.get(f"/api/crops/{crop['id']}").status_code == 401


def test_yield_on_unharvested_crop_is_rejected(alice, crop):
    resp = alice.put(f"/api/crops/{crop['id']}", json={'yieldAmount': 2})
    assert resp.status_code == 400
    assert resp.get_json()['field'] == 'yieldAmount'


def test_missing_crop_is_not_found(alice):
    assert alice.get('/api/crops/31337').status_code == 404
    assert alice.put('/api/crops/31337', json={'name': 'x'}).status_code == 404
