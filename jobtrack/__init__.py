"""JobTrack - job application status tracking service."""
