from django.urls import path

from accounts.handlers.views import ProfileView, SignInView, SignUpView

urlpatterns = [
    path("auth/signup", SignUpView.as_view(), name="auth-signup"),
    path("auth/signin", SignInView.as_view(), name="auth-signin"),
    path("auth/profile", ProfileView.as_view(), name="auth-profile"),
]
