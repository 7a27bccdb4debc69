from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('login-methods/', views.login_methods, name='login-methods'),
    path('check-username/', views.check_username, name='check-username'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/theme/', views.set_theme, name='theme'),

    # Directory search
    path('directory/users/', views.directory_users, name='directory-users'),
    path('directory/groups/', views.directory_groups, name='directory-groups'),
    path('directory/distribution-lists/', views.directory_distribution_lists, name='directory-distribution-lists'),
]
