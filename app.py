"""
EduPlatform - Course Publishing and Learning Platform

Streamlit application where educators publish courses with materials and
students enroll and track lesson progress.

Usage:
    streamlit run app.py
"""

import asyncio

import streamlit as st

from eduplatform.classroom import ingest_uploads, open_material
from eduplatform.config import configure_logging, load_settings
from eduplatform.errors import AuthenticationError, PlatformError
from eduplatform.platform import open_platform
from eduplatform.schemas import CourseFields, LessonKind, Role


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="EduPlatform",
    page_icon="🎓",
    layout="wide",
    initial_sidebar_state="expanded",
)

FILE_ICONS = {
    "video": "🎬",
    "image": "🖼️",
    "document": "📄",
}


def file_icon_category(mime_type: str) -> str:
    """Map a MIME type to the icon group shown next to a material."""
    if mime_type.startswith("video/"):
        return "video"
    if mime_type.startswith("image/"):
        return "image"
    return "document"


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "platform" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level)
        st.session_state.platform = open_platform(settings)

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "dashboard"  # dashboard, course

    if "current_course_id" not in st.session_state:
        st.session_state.current_course_id = None

    if "editing_course_id" not in st.session_state:
        st.session_state.editing_course_id = None


def go_to(view_mode: str, course_id: str | None = None):
    st.session_state.view_mode = view_mode
    st.session_state.current_course_id = course_id
    st.rerun()


def show_error(error: PlatformError):
    st.error(error.message)


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with account info."""
    st.sidebar.title("🎓 EduPlatform")
    user = st.session_state.platform.identity.get_current_user()
    if not user:
        st.sidebar.info("Log in or create an account to get started.")
        return

    st.sidebar.markdown(f"Welcome, **{user.name}** ({user.role.value})")
    if st.sidebar.button("Logout", use_container_width=True):
        st.session_state.platform.identity.logout()
        st.toast("You have been logged out successfully")
        go_to("dashboard")


# -----------------------------------------------------------------------------
# Auth View
# -----------------------------------------------------------------------------

def render_auth_view():
    """Render login and signup forms."""
    identity = st.session_state.platform.identity
    st.title("Learn and teach on EduPlatform")

    tab_login, tab_signup = st.tabs(["Login", "Sign up"])

    with tab_login:
        with st.form("login"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Login"):
                try:
                    user = identity.login(email, password)
                except PlatformError as e:
                    show_error(e)
                else:
                    st.toast(f"Welcome back, {user.name}!")
                    go_to("dashboard")

    with tab_signup:
        with st.form("signup"):
            name = st.text_input("Name")
            email = st.text_input("Email", key="signup_email")
            password = st.text_input("Password", type="password", key="signup_password")
            role = st.radio("I am a", [Role.STUDENT.value, Role.EDUCATOR.value], horizontal=True)
            if st.form_submit_button("Create account"):
                try:
                    identity.signup(email, password, name, role)
                except PlatformError as e:
                    show_error(e)
                else:
                    st.toast("Your account has been created successfully!")
                    go_to("dashboard")


# -----------------------------------------------------------------------------
# Educator Dashboard
# -----------------------------------------------------------------------------

def render_course_form(user, course=None):
    """Render the create/edit course form."""
    platform = st.session_state.platform
    key = course.id if course else "new"

    with st.form(f"course_form_{key}", clear_on_submit=course is None):
        title = st.text_input("Title", value=course.title if course else "")
        description = st.text_area("Description", value=course.description if course else "")
        duration = st.text_input("Duration", value=course.duration if course else "", placeholder="e.g., 4 weeks")
        lessons = st.text_input("Number of lessons", value=str(course.lesson_count) if course else "0")
        thumbnail = st.file_uploader("Thumbnail", type=["png", "jpg", "jpeg", "gif", "webp"])
        materials = st.file_uploader("Study materials", accept_multiple_files=True)

        if not st.form_submit_button("Update course" if course else "Create course"):
            return

    fields = CourseFields(title=title, description=description, duration=duration, lesson_count=lessons)
    try:
        thumbnail_url, ingested = asyncio.run(ingest_uploads(thumbnail, materials or []))
        if thumbnail_url:
            fields.thumbnail = thumbnail_url
        if course:
            platform.courses.update(course.id, user.id, fields, ingested)
            st.session_state.editing_course_id = None
            st.toast("Your course has been updated successfully")
        else:
            platform.courses.create(user.id, user.name, fields, ingested)
            st.toast("Your course has been created successfully")
    except PlatformError as e:
        show_error(e)
        return
    st.rerun()


def render_educator_dashboard(user):
    """Render the educator's course list and course form."""
    platform = st.session_state.platform
    st.title("My Courses")

    with st.expander("➕ Create new course", expanded=False):
        render_course_form(user)

    courses = platform.dashboard.educator_courses(user.id)
    if not courses:
        st.info("You haven't created any courses yet.")
        return

    cols = st.columns(3)
    for i, course in enumerate(courses):
        with cols[i % 3]:
            with st.container(border=True):
                if course.thumbnail:
                    st.image(course.thumbnail, use_container_width=True)
                st.subheader(course.title)
                st.caption(f"{course.duration} • {course.lesson_count} lessons • {len(course.materials)} materials")
                st.write(course.description)

                col_edit, col_delete = st.columns(2)
                with col_edit:
                    if st.button("Edit", key=f"edit_{course.id}", use_container_width=True):
                        st.session_state.editing_course_id = course.id
                        st.rerun()
                with col_delete:
                    if st.button("Delete", key=f"delete_{course.id}", use_container_width=True):
                        try:
                            platform.courses.delete(course.id, user.id)
                        except PlatformError as e:
                            show_error(e)
                        else:
                            st.toast("Your course has been deleted successfully")
                            st.rerun()

                if st.session_state.editing_course_id == course.id:
                    render_course_form(user, course)


# -----------------------------------------------------------------------------
# Student Dashboard
# -----------------------------------------------------------------------------

def render_student_dashboard(user):
    """Render enrolled and available courses."""
    platform = st.session_state.platform
    st.title("My Learning Dashboard")

    stats = platform.dashboard.get_progress_summary(user.id)
    col1, col2, col3 = st.columns(3)
    col1.metric("Enrolled", stats["enrolled"])
    col2.metric("Completed", stats["completed"])
    col3.metric("Average progress", f"{stats['mean_progress_percent']}%")

    view = platform.dashboard.student_view(user.id)

    if view.enrolled:
        st.header("🏆 My Courses")
        for item in view.enrolled:
            with st.container(border=True):
                st.subheader(item.course.title)
                st.caption(f"by {item.course.educator_name}")
                st.progress(item.enrollment.progress_percent / 100)
                st.write(
                    f"{item.enrollment.completed_lesson_count}/{item.course.lesson_count} lessons "
                    f"• {item.enrollment.progress_percent}%"
                )
                label = "Review course" if item.is_complete else "Continue learning"
                if st.button(label, key=f"open_{item.course.id}"):
                    go_to("course", item.course.id)

    st.header("📚 Available Courses")
    if not view.available:
        st.info("No more courses to enroll in right now.")
    for course in view.available:
        with st.container(border=True):
            st.subheader(course.title)
            st.caption(f"by {course.educator_name} • {course.duration} • {course.lesson_count} lessons")
            st.write(course.description)
            if st.button("Enroll now", key=f"enroll_{course.id}"):
                try:
                    platform.ledger.enroll(user.id, course.id)
                except PlatformError as e:
                    show_error(e)
                else:
                    go_to("course", course.id)


# -----------------------------------------------------------------------------
# Course Detail
# -----------------------------------------------------------------------------

def toggle_lesson(student_id: str, course_id: str, lesson_id: str):
    """Checkbox callback: flip one lesson and report it."""
    progress = st.session_state.platform.engine.open_course(student_id, course_id)
    lesson = progress.toggle_lesson(lesson_id)
    if lesson:
        st.toast("Lesson completed!" if lesson.completed else "Lesson unchecked")


def render_course_detail(user):
    """Render lessons, progress and materials for one course."""
    platform = st.session_state.platform
    course_id = st.session_state.current_course_id

    if st.button("← Back to Dashboard"):
        go_to("dashboard")

    try:
        progress = platform.engine.open_course(user.id, course_id)
    except PlatformError as e:
        show_error(e)
        return

    course = progress.course
    main_col, side_col = st.columns([2, 1])

    with main_col:
        st.title(course.title)
        st.caption(f"by {course.educator_name} • Duration: {course.duration} • {course.lesson_count} lessons")
        st.write(course.description)

        st.subheader("Course Content")
        for lesson in progress.lessons:
            icon = "▶️" if lesson.kind == LessonKind.VIDEO else "📄"
            st.checkbox(
                f"{icon} {lesson.title}",
                value=lesson.completed,
                key=f"lesson_{lesson.id}",
                on_change=toggle_lesson,
                args=(user.id, course.id, lesson.id),
            )

        if course.materials:
            st.subheader("Study Materials")
            for material in course.materials:
                icon = FILE_ICONS[file_icon_category(material.mime_type)]
                col_name, col_download = st.columns([4, 1])
                col_name.markdown(f"{icon} **{material.name}** ({material.size_bytes / 1024 / 1024:.2f} MB)")
                try:
                    download = open_material(material)
                except PlatformError as e:
                    show_error(e)
                    continue
                col_download.download_button(
                    "Download",
                    data=download.getvalue(),
                    file_name=download.filename,
                    mime=download.mime_type,
                    key=f"download_{material.id}",
                )

    with side_col:
        stats = progress.get_completion_stats()
        st.subheader("Your Progress")
        st.progress(stats["completion_percent"] / 100)
        st.markdown(f"**Course Completion:** {stats['completion_percent']}%")
        st.markdown(f"**Completed Lessons:** {stats['completed']} / {stats['total_lessons']}")
        if progress.is_complete:
            st.success("Course Completed! 🎉 Congratulations on finishing this course!")


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    identity = st.session_state.platform.identity
    user = identity.get_current_user()
    if not user:
        render_auth_view()
        return

    try:
        if user.role == Role.EDUCATOR:
            render_educator_dashboard(identity.require_role(Role.EDUCATOR))
        elif st.session_state.view_mode == "course" and st.session_state.current_course_id:
            render_course_detail(identity.require_role(Role.STUDENT))
        else:
            render_student_dashboard(identity.require_role(Role.STUDENT))
    except AuthenticationError as e:
        show_error(e)
        render_auth_view()


if __name__ == "__main__":
    main()
