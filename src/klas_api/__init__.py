"""Klas API package.

This package is organized by feature modules (auth, attendance, teachers, ...)
with a thin Flask controller layer over service/repository layers. Storage,
auth and file buckets are provided by Supabase.
"""
