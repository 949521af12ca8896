# Supabase table: mortgage_leads
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (nullable) - set when the visitor is signed in
- property_id: bigint (nullable, foreign key to homes.id)
- name: text (not null)
- email, phone, message: text (nullable)
- property_price, down_payment, interest_rate: numeric (nullable)
- loan_term: integer (nullable) - years
- created_at: timestamp (default: now())
"""
