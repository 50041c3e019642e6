"""Discord embed builders for the sign-up lists."""
