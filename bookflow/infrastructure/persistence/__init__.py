"""SQL persistence (postgres backend): engine, models, repositories, migrations."""
