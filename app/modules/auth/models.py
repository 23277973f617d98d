# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.admin.create_user() - Create a confirmed user (service role key)
- auth.sign_up() - Register new users (anon key)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

The display name is stored as user_metadata.full_name at registration and
copied into the profiles table by ProfileService.ensure_profile.
"""
