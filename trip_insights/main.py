"""Trip Insights - Main Entry Point"""
from trip_insights.config import Config
from trip_insights.services.analyzer import TripAnalyzer


if __name__ == "__main__":
    analyzer = TripAnalyzer(Config)
    analyzer.run()
