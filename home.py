"""Run with ``streamlit run home.py``."""

from sales_dashboard.main import main

main()
