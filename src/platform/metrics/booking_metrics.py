from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Booking System Core Metrics Collector

    Tracks reservation coordinator outcomes and inventory movements
    """

    def __init__(self):
        # ========== Reservation Coordinator Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking and cancellation requests',
            ['operation', 'result'],  # operation: book_tickets/book_seats/cancel_booking
        )

        self.booking_duration = Histogram(
            'booking_duration_seconds',
            'Reservation coordinator processing time',
            ['operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Inventory Metrics ==========
        self.tickets_moved = Counter(
            'booking_tickets_moved_total',
            'Tickets reserved or released through the coordinator',
            ['direction'],  # direction: reserved/released
        )

        self.event_available_seats = Gauge(
            'event_available_seats',
            'Available seats per event after the last committed change',
            ['event_id'],
        )

        # ========== HTTP Metrics ==========
        self.http_request_duration = Histogram(
            'http_request_duration_seconds',
            'API request latency by route template',
            ['method', 'route', 'status'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        # ========== Notification Metrics ==========
        self.notification_failures = Counter(
            'booking_notification_failures_total',
            'Notifications that could not be delivered',
            ['kind'],
        )

    # ========== Helper Methods ==========

    def record_booking_request(self, *, operation: str, result: str, duration: float):
        self.booking_requests.labels(operation=operation, result=result).inc()
        self.booking_duration.labels(operation=operation).observe(duration)

    def record_tickets_moved(self, *, direction: str, count: int, event_id: int, available: int):
        self.tickets_moved.labels(direction=direction).inc(count)
        self.event_available_seats.labels(event_id=str(event_id)).set(available)

    def record_http_request(self, *, method: str, route: str, status: int, duration: float):
        self.http_request_duration.labels(method=method, route=route, status=str(status)).observe(
            duration
        )

    def record_notification_failure(self, *, kind: str):
        self.notification_failures.labels(kind=kind).inc()


# Global metrics instance
metrics = BookingMetrics()
