import os
import importlib

# Automatically import all .py files in the models/tables directory
# so that SQLModel.metadata knows about every table
tables_path = os.path.join(os.path.dirname(__file__), "tables")
for file in sorted(os.listdir(tables_path)):
    if file.endswith(".py") and file != "__init__.py":
        module_name = file[:-3]  # Remove ".py" extension
        importlib.import_module(f"{__name__}.tables.{module_name}")
