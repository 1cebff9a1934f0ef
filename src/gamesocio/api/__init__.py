"""HTTP API for GameSocio."""
