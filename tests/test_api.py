from utils.timezone_utils import date_key, get_user_today


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health_uses_injected_store(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"


def test_add_intake(client, store):
    store.add_user('alice', daily_goal=2000, current_streak=1, last_streak_update='2024-06-09')

    response = client.post("/api/water/intake", json={'user_id': 'alice', 'amount': 2000, 'date': '2024-06-10'})

    assert response.status_code == 200
    data = response.json()
    assert data['percentage'] == 100
    assert data['record']['date'] == '2024-06-10'
    assert data['record']['entries'][0]['amount'] == 2000
    assert data['streak'] == {'current_streak': 2, 'last_streak_update': '2024-06-10'}


def test_invalid_amount_is_a_400(client, store):
    store.add_user('alice')

    for amount in [0, -100, "lots", True, False, None]:
        response = client.post("/api/water/intake", json={'user_id': 'alice', 'amount': amount, 'date': '2024-06-10'})
        assert response.status_code == 400
        assert response.json()['detail'] == "Please enter a valid amount greater than 0"

    assert store.records == {}


def test_invalid_date_is_a_400(client, store):
    response = client.post("/api/water/intake", json={'user_id': 'alice', 'amount': 100, 'date': '10/06/2024'})
    assert response.status_code == 400


def test_future_date_is_a_400(client, store):
    store.add_user('alice')

    response = client.post("/api/water/intake", json={'user_id': 'alice', 'amount': 100, 'date': '2999-01-01'})

    assert response.status_code == 400
    assert response.json()['detail'] == "Cannot log water for a future date"
    assert store.records == {}


def test_user_with_null_streak(client, store):
    store.add_user('alice', current_streak=None)

    response = client.get("/api/users/alice")

    assert response.status_code == 200
    assert response.json()['current_streak'] == 0


def test_today_record_is_created_once(client, store, weather):
    store.add_user('alice', daily_goal=2200)

    first = client.get("/api/water/alice/today", params={'latitude': 12.5, 'longitude': 8.25})
    second = client.get("/api/water/alice/today")

    assert first.status_code == 200
    assert first.json()['total_amount'] == second.json()['total_amount'] == 2200
    assert first.json()['date'] == date_key(get_user_today())
    assert weather.lookups == [(12.5, 8.25)]


def test_today_record_for_unknown_user_is_a_404(client):
    response = client.get("/api/water/ghost/today")
    assert response.status_code == 404
    assert response.json()['detail'] == "User not found"


def test_progress_does_not_create_record(client, store):
    response = client.get("/api/water/alice/progress")

    assert response.json() == {'total_amount': 0, 'percentage': 0, 'entries': []}
    assert store.records == {}


def test_history_is_gap_filled(client, store):
    store.add_record('alice', '2024-06-02', completed_amount=2000, percentage=100)

    response = client.get("/api/water/alice/history", params={'start_date': '2024-06-01', 'end_date': '2024-06-07'})

    data = response.json()
    assert response.status_code == 200
    assert len(data['records']) == 7
    assert data['records']['2024-06-02']['percentage'] == 100
    assert data['records']['2024-06-03']['total_amount'] == 0
    assert data['summary']['days_goal_met'] == 1


def test_history_defaults_to_last_week(client):
    response = client.get("/api/water/alice/history")
    assert len(response.json()['records']) == 7


def test_history_reversed_range_is_a_400(client):
    response = client.get("/api/water/alice/history", params={'start_date': '2024-06-07', 'end_date': '2024-06-01'})
    assert response.status_code == 400


def test_goal_preview(client):
    response = client.post("/api/water/goal/preview", json={'humidity': 50, 'temperature': 30})

    assert response.json() == {'base_goal': 2450, 'weather_adjustment': 500, 'total_amount': 2950}


def test_leaderboard(client, store):
    store.add_user('alice', name='Alice', current_streak=3)
    store.add_user('bob', name='Bob', current_streak=8)

    response = client.get("/api/leaderboard/alice")

    data = response.json()
    assert [e['name'] for e in data['leaderboard']] == ['Bob', 'Alice']
    assert data['user_rank'] == {'position': 2, 'total_users': 2}


def test_leaderboard_unknown_user_is_a_404(client, store):
    store.add_user('alice')
    assert client.get("/api/leaderboard/ghost").status_code == 404


def test_create_and_update_profile(client, store):
    response = client.post("/api/users", json={
        'id': 'alice', 'name': 'Alice', 'email': 'alice@example.com', 'weight': 70,
    })
    assert response.status_code == 200
    assert response.json()['daily_goal'] == 2450

    response = client.put("/api/users/alice/profile", json={'activity_level': 'extreme'})
    assert response.status_code == 200
    assert response.json()['daily_goal'] > 2450
    assert store.users['alice']['activity_level'] == 'extreme'


def test_profile_rejects_unknown_activity(client, store):
    store.add_user('alice')
    response = client.put("/api/users/alice/profile", json={'activity_level': 'marathon'})
    assert response.status_code == 422


def test_streak_endpoint(client, store):
    store.add_user('alice', current_streak=5, last_streak_update='2020-01-01')

    data = client.get("/api/users/alice/streak").json()

    assert data['stored_streak'] == 5
    assert data['current_streak'] == 0


def test_notification_preferences(client, store):
    store.add_user('alice')

    response = client.put("/api/notification-preferences/alice", json={
        'enabled': True, 'reminder_frequency': 2, 'start_time': 9, 'end_time': 21, 'sound_enabled': False,
    })
    assert response.status_code == 200

    prefs = client.get("/api/notification-preferences/alice").json()['preferences']
    assert prefs['reminder_frequency'] == 2
    assert prefs['sound_enabled'] is False

    reset = client.delete("/api/notification-preferences/alice").json()['preferences']
    assert reset['reminder_frequency'] == 4


def test_notification_window_must_be_ordered(client, store):
    store.add_user('alice')
    response = client.put("/api/notification-preferences/alice", json={'start_time': 20, 'end_time': 8})
    assert response.status_code == 422


def test_delete_user(client, store):
    store.add_user('alice')
    store.add_record('alice', '2024-06-01')

    response = client.delete("/api/users/alice")

    assert response.json() == {'success': True, 'deleted_records': 1}
    assert store.users == {}
    assert store.records == {}
