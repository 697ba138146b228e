"""Rate limit machinery: queues, buckets, route keys and the limiter."""
