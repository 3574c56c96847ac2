import unittest
import sys
import os
from fastapi.testclient import TestClient
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from client import HeraclesClient
from rest_api import HeraclesAPI
from settings_schema import SettingsSchema

class ClientTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db_path = 'test_client.sqlite'
        if os.path.exists(self.db_path):
            os.remove(self.db_path)
        settings = SettingsSchema(db_file=self.db_path, jwt_secret='test-secret')
        self.api = HeraclesAPI(settings=settings)
        self.client = HeraclesClient(base_url='http://testserver', session=TestClient(self.api.app))

    def tearDown(self) -> None:
        if os.path.exists(self.db_path):
            os.remove(self.db_path)

    def test_workout_round_trip(self) -> None:
        user = self.client.register('client@example.com', 'Client', 'secret1')
        self.assertEqual(user['email'], 'client@example.com')
        self.assertTrue(self.client.list_exercises())
        wid = self.client.create_workout({
            'date': '2024-01-01',
            'items': [{'itemType': 'exercise', 'exerciseId': 2, 'sets': [{'reps': 5, 'weight': 100}]}],
        })
        self.assertIsInstance(wid, int)
        self.assertEqual(self.client.get_workout(wid)['items'][0]['exerciseId'], 2)
        self.assertEqual(self.client.list_workouts(summary=True)[0]['exerciseNames'], ['Bench Press'])
        self.assertEqual(self.client.stats()['volumeByDay'], {'2024-01-01': 500})
        self.assertEqual(self.client.progression(2)['data'][0]['topWeight'], 100)
        self.client.delete_workout(wid)
        self.assertEqual(self.client.list_workouts(), [])

    def test_login_stores_token(self) -> None:
        self.client.login('admin@local', 'admin123')
        self.assertIsNotNone(self.client.token)
        self.assertEqual(self.client.list_workouts(start_date='2024-01-01'), [])

if __name__ == '__main__':
    unittest.main()
