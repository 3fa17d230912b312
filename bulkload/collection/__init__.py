"""
==========================
Collection Management Module
==========================

This module provides the `CollectionManager`, which stages rows in a CSV collection
and bulk-loads the collection into a database table.


Usage:
>>> from bulkload.collection import CollectionManager
>>> manager = CollectionManager(tmp_dir="/var/tmp/staging")
>>> manager.start_collection("orders", ["id", "total"])

*Created: 2026-10-19*
"""
from bulkload.collection.manager import CollectionManager
