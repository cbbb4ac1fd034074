from conftest import login_client, make_app
from farmtrack.config import TestingConfig
from farmtrack.database.db import db
from farmtrack.database.models import Activity, Crop, Farm, Field
from farmtrack.services.activity_service import ActivityService


def test_first_listing_seeds_one_sample_farm(app, alice):
    farms = alice.get('/api/farms').get_json()
    assert len(farms) == 1
    farm = farms[0]
    assert farm['name'] == 'Green Valley Farm'
    assert farm['userId'] == alice.user_id

    detail = alice.get(f"/api/farms/{farm['id']}").get_json()
    assert [f['name'] for f in detail['fields']] == ['North Field', 'South Pasture']

    north, south = detail['fields']
    corn = alice.get(f"/api/fields/{north['id']}/crops").get_json()
    wheat = alice.get(f"/api/fields/{south['id']}/crops").get_json()
    assert [c['name'] for c in corn] == ['Corn']
    assert wheat[0]['status'] == 'harvested'
    assert wheat[0]['yieldAmount'] == 4.5

    activities = alice.get('/api/activities').get_json()
    assert [a['type'] for a in activities] == ['irrigation', 'sowing']
    assert all(a['fieldId'] == north['id'] for a in activities)


def test_seeding_is_not_repeated(app, alice):
    first = alice.get('/api/farms').get_json()
    second = alice.get('/api/farms').get_json()
    assert [f['id'] for f in second] == [f['id'] for f in first]

    with app.app_context():
        assert Farm.query.filter_by(user_id=alice.user_id).count() == 1
        assert Field.query.count() == 2
        assert Crop.query.count() == 2
        assert Activity.query.count() == 2


def test_users_with_farms_are_not_seeded(alice, farm):
    farms = alice.get('/api/farms').get_json()
    assert [f['name'] for f in farms] == ['Riverbend']


def test_failed_seed_rolls_back_everything(app, alice, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError('disk full')

    monkeypatch.setattr(ActivityService, 'create_activity', boom)
    resp = alice.get('/api/farms')
    assert resp.status_code == 500
    assert resp.get_json() == {'message': 'Internal Server Error'}

    with app.app_context():
        assert Farm.query.count() == 0
        assert Field.query.count() == 0
        assert Crop.query.count() == 0

    monkeypatch.undo()
    assert len(alice.get('/api/farms').get_json()) == 1


class NoSeedConfig(TestingConfig):
    SEED_NEW_USERS = False


def test_seeding_can_be_disabled():
    app = make_app(NoSeedConfig)
    try:
        client = login_client(app, 'plain')
        assert client.get('/api/farms').get_json() == []
    finally:
        with app.app_context():
            db.drop_all()
