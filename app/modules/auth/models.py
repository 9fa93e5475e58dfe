# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Password sign-in and session issuance
# - Token refresh and auth state change notifications

"""
Supabase Auth calls used here:
- auth.sign_up() - Register a client or creator
- auth.sign_in_with_password() - Start a session
- auth.sign_out() - End the session
- auth.get_session() - Current session snapshot
- auth.on_auth_state_change() - Subscribe to SIGNED_IN / SIGNED_OUT / TOKEN_REFRESHED
- auth.get_user() - Resolve a bearer token to a user

user_metadata written at sign-up:
- full_name: text
- user_type: "client" | "creator"
- original_email: the address as typed (differs from auth email for the admin)

A database trigger copies these into public.profiles (see profiles/models.py).
"""
