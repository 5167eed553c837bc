"""REST routers for the therapist directory, community board and chat rooms."""
