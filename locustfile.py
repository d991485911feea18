from locust import HttpUser, task, between
import random
import uuid

class StudentUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        # Idempotent; the first user to arrive seeds the demo driver and rides
        self.client.post("/rides/seed")
        self.student_id = str(uuid.uuid4())

    @task(3)
    def search_rides(self):
        self.client.get("/rides")

    @task
    def request_ride(self):
        with self.client.get("/rides", catch_response=True) as response:
            if response.status_code != 200:
                response.failure(f"Failed with status {response.status_code}: {response.text}")
                return
            rides = response.json()
            response.success()

        if not rides:
            return
        ride = random.choice(rides)

        payload = {
            "ride_id": ride["id"],
            "passenger_id": self.student_id,
            "passenger_name": "Load Test Student",
            "passenger_phone": "+252 90 000 0000",
            "driver_id": ride["driver_id"],
            "driver_name": ride["driver_name"],
            "route": ride["route"],
            "departure_time": ride["departure_time"],
            "price": ride["price"],
        }

        with self.client.post("/requests", json=payload, catch_response=True) as response:
            if response.status_code == 201:
                response.success()
            else:
                response.failure(f"Failed with status {response.status_code}: {response.text}")
