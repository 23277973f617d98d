# Supabase table: reports
# Supabase Storage bucket: report_images (name configurable via REPORT_BUCKET)

"""
Expected Supabase table structure:

reports:
- id: bigint (primary key, generated)
- name: text
- contact_number: text (nullable)
- age: integer (nullable)
- report_type: text - 'crime' | 'accident' | any other label
- description: text
- date: text (nullable) - as entered on the form
- location: text (nullable)
- image_path: text (nullable) - object path inside the bucket, e.g. images/1714567890123-photo.jpg
- created_at: timestamp (default: now())

Rows are insert-only; nothing in the API updates or deletes them.
"""
