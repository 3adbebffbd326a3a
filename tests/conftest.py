from __future__ import annotations

import os

# Settings() is built at import time; the HTTP tests never reach Supabase.
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
