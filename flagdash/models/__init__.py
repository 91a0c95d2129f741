from flagdash.models.kv_entry import KvEntry
