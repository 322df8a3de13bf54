from shoestore.schemas.principal import Principal

CUSTOMER = Principal(uid="user-1", role="user", email="jane@example.com", display_name="Jane Doe")
OTHER_CUSTOMER = Principal(uid="user-2", role="user", email="sam@example.com", display_name="Sam Roe")
ADMIN = Principal(uid="admin-1", role="admin", email="admin@example.com", display_name="Admin")
