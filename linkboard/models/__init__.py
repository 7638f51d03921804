"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate relies on `SQLModel.metadata`, which is populated only
  when the table models are imported.
- `alembic/env.py` imports `linkboard.models`, so this module must import all
  SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from linkboard.auth.models import SessionRecord  # noqa: F401
from linkboard.bio_page.models import Profile  # noqa: F401
from linkboard.link.models import SocialLink  # noqa: F401
from linkboard.theme.models import Theme  # noqa: F401
from linkboard.user.models import User  # noqa: F401
