from datetime import datetime, timedelta, timezone

import pandas as pd
import streamlit as st

from dashboard.actions import mutate
from dashboard.constants import CARDIO_TYPES, TIMER_DURATIONS, TIMER_TYPES
from dashboard.data.loaders import CARDIO_PATH, HEALTH_PATH, TIMER_SESSIONS_PATH, WORKOUTS_PATH, load_health
from dashboard.metrics.completion import focus_completion
from dashboard.metrics.dates import format_day, parse_day, parse_timestamp
from dashboard.metrics.fitness import (
    cardio_minutes,
    cardio_summary,
    exercise_summary,
    pace_min_per_km,
    sleep_summary,
    to_pounds,
    workout_duration_minutes,
    workout_summary,
)
from dashboard.state import session_slices
from dashboard.visualizations import dot_chart

SLICE = "health"


def _save_health(ctx):
    state = st.session_state
    day = state.get("health.day") or ctx.today
    payload = {
        "date": format_day(day),
        "sleep_hours": state.get("health.sleep_hours"),
        "sleep_quality": state.get("health.sleep_quality"),
        "exercise_minutes": state.get("health.exercise_minutes"),
        "exercise_type": (state.get("health.exercise_type") or "").strip() or None,
        "calories_burned": state.get("health.calories_burned"),
        "mood": state.get("health.mood"),
        "notes": (state.get("health.notes") or "").strip() or None,
    }
    mutate(ctx, "POST", HEALTH_PATH, json=payload, invalidates=[HEALTH_PATH], success="Health entry saved")


def _start_timer(timer_type):
    session_slices.update_slice(
        SLICE,
        {"timer_type": timer_type, "timer_started": datetime.now(timezone.utc).isoformat()},
    )


def _finish_timer(ctx, completed):
    timer = session_slices.get_slice(SLICE)
    started = timer.get("timer_started")
    if not started:
        return
    timer_type = timer.get("timer_type") or "pomodoro"
    elapsed = (datetime.now(timezone.utc) - parse_timestamp(started)).total_seconds() / 60
    duration = TIMER_DURATIONS[timer_type] if completed else max(1, int(elapsed))
    session_slices.update_slice(SLICE, {"timer_started": None})
    mutate(
        ctx,
        "POST",
        TIMER_SESSIONS_PATH,
        json={"date": format_day(ctx.today), "type": timer_type, "duration": duration, "completed": completed},
        invalidates=[TIMER_SESSIONS_PATH],
        success="Session logged" if completed else None,
    )


def _start_workout(ctx):
    mutate(ctx, "POST", WORKOUTS_PATH, json={}, invalidates=[WORKOUTS_PATH], success="Workout started")


def _finish_workout(ctx, workout_id):
    mutate(
        ctx,
        "PATCH",
        f"{WORKOUTS_PATH}/{workout_id}",
        json={"ended_at": datetime.now(timezone.utc).isoformat()},
        invalidates=[WORKOUTS_PATH],
        success="Workout finished",
    )


def _add_set(ctx, workout_id):
    state = st.session_state
    name = (state.get("health.set_exercise") or "").strip()
    if not name:
        st.warning("Name the exercise first.")
        return
    payload = {
        "exercise_name": name,
        "weight": float(state.get("health.set_weight") or 0),
        "reps": int(state.get("health.set_reps") or 0),
    }
    mutate(ctx, "POST", f"{WORKOUTS_PATH}/{workout_id}/sets", json=payload, invalidates=[WORKOUTS_PATH])


def _log_cardio(ctx):
    state = st.session_state
    minutes = int(state.get("health.cardio_minutes") or 0)
    if minutes <= 0:
        st.warning("Duration must be a positive number of minutes.")
        return
    distance_km = float(state.get("health.cardio_km") or 0)
    payload = {
        "date": format_day(ctx.today),
        "type": state.get("health.cardio_type") or "run",
        "duration_sec": minutes * 60,
        "distance_meters": distance_km * 1000 if distance_km > 0 else None,
    }
    mutate(ctx, "POST", CARDIO_PATH, json=payload, invalidates=[CARDIO_PATH], success="Cardio logged")


def _delete_cardio(ctx, entry_id):
    mutate(ctx, "DELETE", f"{CARDIO_PATH}/{entry_id}", invalidates=[CARDIO_PATH])


def _render_entry_form(ctx, entries):
    day = st.date_input("Day", value=ctx.today, max_value=ctx.today, key="health.day")
    existing = next((entry for entry in entries if parse_day(entry.get("date")) == day), {})
    cols = st.columns(3)
    cols[0].number_input("Sleep (h)", 0.0, 24.0, float(existing.get("sleep_hours") or 0), 0.5, key="health.sleep_hours")
    cols[1].slider("Sleep quality", 1, 10, int(existing.get("sleep_quality") or 5), key="health.sleep_quality")
    cols[2].slider("Mood", 1, 10, int(existing.get("mood") or 5), key="health.mood")
    more = st.columns(3)
    more[0].number_input("Exercise (min)", 0, 600, int(existing.get("exercise_minutes") or 0), key="health.exercise_minutes")
    more[1].text_input("Exercise type", existing.get("exercise_type") or "", key="health.exercise_type")
    more[2].number_input("Calories burned", 0, 5000, int(existing.get("calories_burned") or 0), key="health.calories_burned")
    st.text_input("Notes", existing.get("notes") or "", key="health.notes")
    st.button("Save", key="health.save", on_click=_save_health, args=(ctx,))


def _render_trends(ctx, entries):
    sleep = sleep_summary(entries, ctx.today)
    exercise = exercise_summary(entries, ctx.today)
    cols = st.columns(4)
    cols[0].metric("Avg sleep (7d)", f"{sleep.average_hours} h")
    cols[1].metric("Sleep quality", sleep.average_quality)
    cols[2].metric("Exercise (7d)", f"{exercise.total_minutes} min", f"{exercise.workout_days} days", delta_color="off")
    cols[3].metric("Calories burned", exercise.total_calories)

    if not entries:
        return
    frame = pd.DataFrame(entries)
    frame["date"] = frame["date"].map(parse_day)
    frame = frame.sort_values("date")
    chart_cols = st.columns(2)
    if "sleep_hours" in frame:
        chart_cols[0].plotly_chart(dot_chart(frame["sleep_hours"], frame["date"], "Sleep", "#a9c0e8"), use_container_width=True)
    if "exercise_minutes" in frame:
        chart_cols[1].plotly_chart(dot_chart(frame["exercise_minutes"], frame["date"], "Exercise", "#b7d1c9"), use_container_width=True)


def _render_timer(ctx, sessions):
    summary = focus_completion(sessions)
    st.caption(f"Today: {summary.completed_sessions} sessions · {summary.total_minutes} min")
    timer = session_slices.get_slice(SLICE)
    started = timer.get("timer_started")
    if started:
        timer_type = timer.get("timer_type") or "pomodoro"
        ends = parse_timestamp(started) + timedelta(minutes=TIMER_DURATIONS[timer_type])
        remaining = max(0, int((ends - datetime.now(timezone.utc)).total_seconds() // 60))
        st.markdown(f"**{timer_type}** running · about {remaining} min left")
        cols = st.columns(2)
        cols[0].button("Complete", key="health.timer_done", on_click=_finish_timer, args=(ctx, True))
        cols[1].button("Stop", key="health.timer_stop", on_click=_finish_timer, args=(ctx, False))
        return
    timer_type = st.segmented_control("Timer", TIMER_TYPES, default="pomodoro", key="health.timer_type")
    st.button(
        f"Start {TIMER_DURATIONS.get(timer_type or 'pomodoro')} min",
        key="health.timer_start",
        on_click=_start_timer,
        args=(timer_type or "pomodoro",),
    )


def _render_workouts(ctx, workouts):
    active = next((workout for workout in workouts if not workout.get("ended_at")), None)
    if active is None:
        st.button("Start workout", key="health.workout_start", on_click=_start_workout, args=(ctx,))
    else:
        sets = active.get("sets") or []
        summary = workout_summary(sets)
        st.markdown(
            f"**Workout in progress** · {workout_duration_minutes(active)} min · "
            f"{summary.total_sets} sets · {summary.total_volume} kg volume"
        )
        for item in sets:
            st.caption(
                f"{item.get('exercise_name')}: {item.get('reps')} × {item.get('weight')} kg"
                f" ({to_pounds(item.get('weight'))} lb)"
            )
        cols = st.columns([0.5, 0.25, 0.25])
        cols[0].text_input("Exercise", key="health.set_exercise")
        cols[1].number_input("Weight (kg)", 0.0, 1000.0, 0.0, 2.5, key="health.set_weight")
        cols[2].number_input("Reps", 0, 200, 8, key="health.set_reps")
        actions = st.columns(2)
        actions[0].button("Add set", key="health.set_add", on_click=_add_set, args=(ctx, active["id"]))
        actions[1].button("Finish workout", key="health.workout_finish", on_click=_finish_workout, args=(ctx, active["id"]))

    finished = [workout for workout in workouts if workout.get("ended_at")]
    for workout in finished[:5]:
        summary = workout_summary(workout.get("sets"))
        started = parse_timestamp(workout["started_at"]).date().isoformat()
        st.caption(
            f"{started} · {workout_duration_minutes(workout)} min · {summary.exercises} exercises · "
            f"{summary.total_sets} sets · {summary.total_volume} kg"
        )


def _render_cardio(ctx, entries):
    week = [entry for entry in entries if (ctx.today - parse_day(entry.get("date"))).days < 7]
    summary = cardio_summary(week)
    pace = f"{summary.average_pace} min/km" if summary.average_pace else "n/a"
    st.caption(f"Last 7 days: {summary.sessions} sessions · {summary.total_minutes} min · {summary.total_km} km · {pace}")
    cols = st.columns(3)
    cols[0].selectbox("Activity", CARDIO_TYPES, key="health.cardio_type")
    cols[1].number_input("Minutes", 1, 600, 30, key="health.cardio_minutes")
    cols[2].number_input("Distance (km)", 0.0, 500.0, 0.0, 0.1, key="health.cardio_km")
    st.button("Log cardio", key="health.cardio_log", on_click=_log_cardio, args=(ctx,))
    for entry in entries[:5]:
        entry_pace = pace_min_per_km(entry)
        row = st.columns([0.85, 0.15])
        row[0].caption(
            f"{entry.get('date')} · {entry.get('type')} · {cardio_minutes(entry)} min"
            + (f" · {entry_pace} min/km" if entry_pace else "")
        )
        row[1].button("🗑", key=f"health.cardio_delete.{entry['id']}", on_click=_delete_cardio, args=(ctx, entry["id"]))


def render_health_tab(ctx):
    data = load_health(ctx.cache, ctx.today)
    entries = data["health_entries"]
    left, right = st.columns([0.6, 0.4])
    with left:
        st.markdown("<div class='section-title'>Health</div>", unsafe_allow_html=True)
        _render_trends(ctx, entries)
        with st.expander("Log day", expanded=not any(parse_day(e.get("date")) == ctx.today for e in entries)):
            _render_entry_form(ctx, entries)
    with right:
        st.markdown("<div class='section-title'>Focus</div>", unsafe_allow_html=True)
        _render_timer(ctx, data["timer_sessions"])
        st.markdown("<div class='section-title' style='margin-top:12px;'>Workouts</div>", unsafe_allow_html=True)
        _render_workouts(ctx, data["workouts"])
        st.markdown("<div class='section-title' style='margin-top:12px;'>Cardio</div>", unsafe_allow_html=True)
        _render_cardio(ctx, data["cardio"])
