"""Foundation - errors, result values and configuration shared by the runtime."""
