"""Enquiry store adapter

Document models for enquiries, the product catalog and transcripts, the
report time-range helper, and the aggregation pipelines that ``EnquiryStore``
runs against MongoDB."""
