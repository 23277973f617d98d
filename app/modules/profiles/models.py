# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- full_name: text (nullable)
- email: text (nullable)
- grade_level: text (nullable)
- school: text (nullable)
- role: text (not null, default: 'student') - 'student' | 'admin'
- created_at: timestamp (default: now())

One row per auth user. The primary key on id is what makes the
provisioning upsert in ProfileService.ensure_profile safe to repeat.
"""
