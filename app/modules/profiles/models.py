# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- full_name: text (not null)
- user_type: user_type enum ('creator' | 'client'), fixed at sign-up
- email: text (not null) - synced from auth.users
- bio: text (nullable)
- location: text (nullable)
- avatar_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Rows are inserted by an on-signup trigger on auth.users that reads
full_name and user_type from raw_user_meta_data. Nothing in this codebase
inserts profiles.
"""
