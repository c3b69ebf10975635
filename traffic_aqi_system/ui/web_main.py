"""
Web UI module for the Traffic AQI System.

This module provides a Streamlit-based dashboard for the Traffic AQI system.
Supports four views: Dashboard (24-hour city trends), Predictor (what-if
traffic scenarios), City Map (live readings with simulated fallback) and
Dataset (table and CSV export).
"""

import sys
from pathlib import Path

# Add project root to Python path to enable imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pandas as pd
import streamlit as st
from streamlit_autorefresh import st_autorefresh

from trafficaqi.aqi_classifier import AQIClassifier
from trafficaqi.city_snapshot import CitySnapshot
from trafficaqi.config import AppConfig, configure_logging
from trafficaqi.dataset_export import EXPORT_FILENAME, series_to_csv, series_to_dataframe
from trafficaqi.exceptions import InvalidScenarioError
from trafficaqi.prediction_input import PredictionInput
from trafficaqi.traffic_aqi_system import TrafficAQISystem

LIVE_REFRESH_MS = 5 * 60 * 1000

VIEWS = ["Dashboard", "Predictor", "City Map", "Dataset"]


# Initialize the system once per session
if "traffic_aqi_system" not in st.session_state:
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    st.session_state.traffic_aqi_system = TrafficAQISystem(config=config)

if "live_readings" not in st.session_state:
    st.session_state.live_readings = {}

if "custom_area" not in st.session_state:
    st.session_state.custom_area = None


def render_dashboard(system: TrafficAQISystem, city_id: str) -> None:
    """Renders the headline metrics and the 24-hour charts for a city."""
    summary = system.dashboard_summary(city_id)
    df = series_to_dataframe(summary.series).set_index("TimeSlot")

    st.subheader(f"{summary.city.name}: last 24 hours")
    st.caption(summary.city.description)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Average AQI", summary.average_aqi)
    col2.metric("Peak AQI", summary.peak_aqi)
    col3.metric("Peak traffic (veh/h)", summary.peak_traffic)
    col4.metric("Current speed", f"{summary.current.avg_speed} km/h")

    st.markdown("**AQI and PM2.5**")
    st.line_chart(df[["AQI", "PM2.5"]])

    st.markdown("**Traffic volume**")
    st.bar_chart(df[["VehicleCount", "HeavyVehicleCount"]])

    st.markdown("**Average speed (km/h)**")
    st.line_chart(df[["AvgSpeed"]])

    st.info(
        f"{summary.city.name} baseline AQI is {summary.city.base_aqi}. "
        f"Traffic spikes contribute approx {summary.traffic_contribution_pct}% to pollution peaks."
    )


def render_predictor(system: TrafficAQISystem, city_id: str) -> None:
    """Renders the scenario sliders and the prediction for a city."""
    city = system.get_city(city_id)
    defaults = system.default_scenario(city)

    left_col, right_col = st.columns(2)

    with left_col:
        st.subheader(f"Simulation: {city.name}")
        st.caption(f"Adjust parameters to see impact on {city.name}'s air quality.")

        vehicle_count = st.slider(
            "Vehicle volume (veh/h)",
            min_value=100,
            max_value=int(max(3500, city.base_traffic * 1.5)),
            value=int(defaults.vehicle_count),
            step=50,
            key=f"vehicle_count_{city.id}",
        )
        avg_speed = st.slider(
            "Average speed (km/h)",
            min_value=5,
            max_value=100,
            value=int(defaults.avg_speed),
            step=5,
        )
        heavy_vehicle_ratio = st.slider(
            "Heavy vehicle ratio",
            min_value=0.0,
            max_value=0.5,
            value=defaults.heavy_vehicle_ratio,
            step=0.05,
        )
        ev_adoption = st.slider(
            "EV adoption",
            min_value=0.0,
            max_value=1.0,
            value=defaults.ev_adoption,
            step=0.05,
        )
        is_odd_even_policy = st.checkbox("Odd-Even policy active", value=False)

    prediction_input = PredictionInput(
        vehicle_count=vehicle_count,
        heavy_vehicle_ratio=heavy_vehicle_ratio,
        avg_speed=avg_speed,
        ev_adoption=ev_adoption,
        is_odd_even_policy=is_odd_even_policy,
    )

    with right_col:
        st.subheader("Prediction")
        try:
            result = system.predict_scenario(prediction_input, enable_persistent_logging=True)
        except InvalidScenarioError as e:
            st.error(f"Invalid scenario: {e}")
            return

        st.metric("Predicted AQI", result.predicted_aqi)
        st.markdown(
            f"<span style='color:{result.color}; font-weight:bold'>{result.category.value}</span>",
            unsafe_allow_html=True,
        )
        st.caption(result.description)
        st.progress(min(result.predicted_aqi, 500) / 500)
        st.info(result.impact_analysis)

        metrics = system.model_metrics()
        with st.expander("Model details", expanded=False):
            st.write(f"- R²: {metrics.r_squared}")
            st.write(f"- Mean absolute error: {metrics.mean_absolute_error}")
            st.write(f"- Training size: {metrics.training_size}")
            st.write(f"- Features: {', '.join(metrics.features)}")


def render_snapshot(snapshot: CitySnapshot) -> None:
    """Renders the side panel for a city or custom area."""
    stats = snapshot.stats
    st.subheader(snapshot.city.name)
    if snapshot.is_live:
        st.success(f"Live station data (fetched {snapshot.live.observed_at.strftime('%H:%M:%S')})")
    else:
        st.warning("No live data available, showing simulated values.")

    col1, col2, col3 = st.columns(3)
    col1.metric("AQI", stats.aqi)
    col2.metric("PM2.5", stats.pm25)
    col3.metric("Traffic (veh/h)", stats.vehicle_count)
    st.caption(f"Category: {AQIClassifier().classify(stats.aqi).category.value}")


def render_city_map(system: TrafficAQISystem, city_id: str) -> None:
    """Renders the catalog on a map with live readings and the custom-area lookup."""
    if system.lookup.is_live:
        refresh_count = st_autorefresh(interval=LIVE_REFRESH_MS, limit=None, key="live_map_refresh")
        if st.sidebar.button("Refresh live data") or refresh_count != st.session_state.get("last_refresh_count"):
            st.session_state.live_readings = system.live_readings()
            st.session_state.last_refresh_count = refresh_count
    else:
        st.sidebar.info("Offline mode: live lookups are disabled.")

    readings = st.session_state.live_readings
    classifier = AQIClassifier()

    rows = []
    for city in system.cities():
        live = readings.get(city.id)
        aqi = live.aqi if live is not None else system.city_snapshot(city.id).stats.aqi
        rows.append({
            "city": city.name,
            "lat": city.lat,
            "lon": city.lng,
            "aqi": aqi,
            "color": classifier.color_for(aqi),
            "source": "live" if live is not None else "simulated",
        })
    map_df = pd.DataFrame(rows)

    map_col, panel_col = st.columns([2, 1])
    with map_col:
        st.map(map_df, latitude="lat", longitude="lon", color="color", size=20000)
        st.dataframe(map_df[["city", "aqi", "source"]], use_container_width=True, hide_index=True)

    with panel_col:
        render_snapshot(system.city_snapshot(city_id, readings.get(city_id)))

        st.divider()
        st.subheader("Custom area")
        lat = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=28.55, format="%.3f")
        lng = st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=77.25, format="%.3f")
        if st.button("Look up area"):
            st.session_state.custom_area = system.custom_area(lat, lng)
        if st.session_state.custom_area is not None:
            render_snapshot(st.session_state.custom_area)


def render_dataset(system: TrafficAQISystem, city_id: str) -> None:
    """Renders the generated series as a table with a CSV download."""
    city = system.get_city(city_id)
    series = system.city_series(city_id)
    df = series_to_dataframe(series)

    st.subheader(f"Training dataset: {city.name}")
    st.caption("Synthetic hourly traffic and air quality records.")
    st.download_button(
        "Export CSV",
        data=series_to_csv(series),
        file_name=EXPORT_FILENAME,
        mime="text/csv",
    )
    st.dataframe(df, use_container_width=True, hide_index=True)


def main() -> None:
    """
    Main function that runs the Streamlit web interface.

    Sets up the page layout, the city and view selectors, and renders the
    selected view.
    """
    st.set_page_config(page_title="Traffic AQI Dashboard", layout="wide")
    st.title("Traffic & Air Quality Dashboard")

    system: TrafficAQISystem = st.session_state.traffic_aqi_system

    cities = system.cities()
    city = st.sidebar.selectbox(
        "City",
        cities,
        format_func=lambda c: c.name,
        help="City used by every view",
    )
    view = st.sidebar.radio("View", VIEWS)

    if view == "Dashboard":
        render_dashboard(system, city.id)
    elif view == "Predictor":
        render_predictor(system, city.id)
    elif view == "City Map":
        render_city_map(system, city.id)
    else:
        render_dataset(system, city.id)


if __name__ == "__main__":
    main()
