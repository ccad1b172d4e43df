"""Animation generation - scene code, validation, rendering and retries."""
