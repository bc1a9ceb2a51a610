"""AceInterview: AI mock-interview coach."""
