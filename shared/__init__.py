"""
shared – tiny helpers imported by every service
-----------------------------------------------
Modules
-------
config.py         → loads `.env` once per process, typed env lookups
logging.py        → consistent JSON/stdout logger
constants.py      → key names, window sizes, upstream URLs
redis_client.py   → lazy Redis connection + alert dedup store
"""
