"""Index delta domain: dirty tracking, delta trackers and rebuild triggering."""
