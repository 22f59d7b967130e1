"""Configuration types, built-in project templates and layered configuration loading."""