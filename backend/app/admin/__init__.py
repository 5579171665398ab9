"""
Back-office controller: immutable drafts, reducers and the save pipeline
that reconciles a draft with the storefront API.
"""
