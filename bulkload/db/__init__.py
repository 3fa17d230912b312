from bulkload.db.sql import load_data as load_data_sql_statements
