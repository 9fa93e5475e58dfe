# Supabase tables: services
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

services:
- id: uuid (primary key)
- creator_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (not null)
- category: service_category enum (not null) - see schemas.ServiceCategory
- price: numeric (not null)
- delivery_time: integer (not null) - days
- image_url: text (nullable)
- tags: text[] (nullable) - at most 5, unique, order as entered
- is_active: boolean (default: true)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Row-level security:
- anyone may select rows where is_active
- creators may insert rows with creator_id = auth.uid()
- owners (and the admin account) may update; rows are never deleted
"""
