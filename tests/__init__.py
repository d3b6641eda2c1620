import os

# Keep tests off the on-disk development database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
