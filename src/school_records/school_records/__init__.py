"""School records package.

Feature modules (records, payroll, attachments, messaging) sit on top of one
record store with two interchangeable backends: a local key-value file or a
remote MySQL database. A thin Flask controller layer exposes them as JSON.
"""
