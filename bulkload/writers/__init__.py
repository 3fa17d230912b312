from bulkload.writers.csv_writer import CsvWriter
