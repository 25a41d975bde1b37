"""Delta index orchestration: dirty tracking and rebuild triggering for search indexes."""
